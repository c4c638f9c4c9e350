"""Template registry — maps template names to template classes.

Each template renders a plain-text ``{"subject", "body"}`` pair from a
context dict prepared by the notification service.
"""

from notifications.templates.cart_checkout import CartCheckoutTemplate
from notifications.templates.contact import ContactMessageTemplate, ContactReceiptTemplate
from notifications.templates.newsletter import NewsletterSignupAlertTemplate, NewsletterWelcomeTemplate
from notifications.templates.order_alert import OrderAlertTemplate
from notifications.templates.order_confirmation import OrderConfirmationTemplate

TEMPLATE_REGISTRY: dict[str, type] = {
    template.name: template
    for template in (
        OrderAlertTemplate,
        OrderConfirmationTemplate,
        CartCheckoutTemplate,
        NewsletterWelcomeTemplate,
        NewsletterSignupAlertTemplate,
        ContactMessageTemplate,
        ContactReceiptTemplate,
    )
}


def get_template(name: str):
    """Look up a template class by name."""
    template_cls = TEMPLATE_REGISTRY.get(name)
    if template_cls is None:
        raise ValueError(f"No template registered with name: {name}")
    return template_cls
