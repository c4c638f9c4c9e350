"""Contact form templates — the operator copy and the sender's receipt."""


class ContactMessageTemplate:
    name = "contact_message"

    @staticmethod
    def render(context: dict) -> dict:
        return {
            "subject": f"New Contact Form Submission: {context['subject']}",
            "body": (
                f"From: {context['name']} <{context['email']}>\n"
                f"Subject: {context['subject']}\n\n"
                f"{context['message']}"
            ),
        }


class ContactReceiptTemplate:
    name = "contact_receipt"

    @staticmethod
    def render(context: dict) -> dict:
        return {
            "subject": f"Thank you for contacting {context['store_name']}",
            "body": (
                f"Hi {context['name']},\n\n"
                "We received your message and will get back to you within 24 hours.\n\n"
                f"Subject: {context['subject']}\n"
                f"Message:\n{context['message']}\n\n"
                f"The {context['store_name']} Team"
            ),
        }
