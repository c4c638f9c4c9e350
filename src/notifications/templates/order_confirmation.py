"""Order confirmation template — sent to the customer once the order is stored."""

from notifications.templates.formatting import item_lines


class OrderConfirmationTemplate:
    name = "order_confirmation"

    @staticmethod
    def render(context: dict) -> dict:
        order_id = context["order_id"]
        return {
            "subject": f"Order Confirmation: #{order_id}",
            "body": (
                f"Dear {context['customer_name']},\n\n"
                "Thank you for your order! We have received it and are getting it ready.\n\n"
                f"Order #{order_id}\n"
                f"Placed: {context['placed_at']}\n"
                f"Payment: {context['payment_method']}\n\n"
                f"{item_lines(context['items'])}\n\n"
                f"Total: {context['total']}\n\n"
                f"Estimated shipping date: {context['ship_date']}\n"
                "Estimated delivery: 3-5 business days after shipping\n"
                f"Shipping to: {context['address']}\n\n"
                f"Thank you for shopping with {context['store_name']}!"
            ),
        }
