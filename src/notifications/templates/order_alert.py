"""Order alert template — tells the store operator a new order came in."""

from notifications.templates.formatting import item_lines


class OrderAlertTemplate:
    name = "order_alert"

    @staticmethod
    def render(context: dict) -> dict:
        order_id = context["order_id"]
        return {
            "subject": f"New Order Received: #{order_id}",
            "body": (
                f"Order #{order_id} was placed on {context['placed_at']}.\n"
                f"Status: {context['status']}\n"
                f"Payment: {context['payment_method']}\n\n"
                "Customer:\n"
                f"  {context['customer_name']} <{context['customer_email']}>\n"
                f"  Phone: {context.get('customer_phone') or 'Not provided'}\n"
                f"  Ship to: {context['address']}\n\n"
                "Items:\n"
                f"{item_lines(context['items'])}\n\n"
                f"Total: {context['total']}\n\n"
                "Please review and process this order in the admin panel."
            ),
        }
