"""Newsletter templates — subscriber welcome and operator signup alert."""


class NewsletterWelcomeTemplate:
    name = "newsletter_welcome"

    @staticmethod
    def render(context: dict) -> dict:
        store = context["store_name"]
        return {
            "subject": f"Welcome to {store} Newsletter!",
            "body": (
                f"Thanks for subscribing to the {store} newsletter.\n\n"
                "You'll be the first to hear about new arrivals, seasonal offers "
                "and exclusive discounts.\n\n"
                f"Browse the latest products at {context['storefront_url']}"
            ),
        }


class NewsletterSignupAlertTemplate:
    name = "newsletter_signup_alert"

    @staticmethod
    def render(context: dict) -> dict:
        return {
            "subject": f"New Newsletter Subscription: {context['email']}",
            "body": f"{context['email']} subscribed to the newsletter on {context['subscribed_at']}.",
        }
