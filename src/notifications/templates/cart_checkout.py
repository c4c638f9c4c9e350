"""Cart checkout template — a summary of the cart the customer is checking out."""

from notifications.templates.formatting import item_lines


class CartCheckoutTemplate:
    name = "cart_checkout"

    @staticmethod
    def render(context: dict) -> dict:
        return {
            "subject": f"Your Cart Checkout - {context['store_name']}",
            "body": (
                f"Hi {context['customer_name']},\n\n"
                "Here is a summary of the items in your cart:\n\n"
                f"{item_lines(context['items'])}\n\n"
                f"Cart total: {context['total']}\n\n"
                f"Complete your order any time at {context['storefront_url']}/cart"
            ),
        }
