from email.message import EmailMessage
import aiosmtplib

# Project Imports
from helper.config import EMAIL_HOST, EMAIL_PORT, EMAIL_USERNAME, EMAIL_PASSWORD


def email_is_configured() -> bool:
    return all([EMAIL_HOST, EMAIL_USERNAME, EMAIL_PASSWORD])


async def send_email(subject: str, to_whom: str, body: str, is_html: bool = False):
    message = EmailMessage()

    message["From"] = EMAIL_USERNAME
    message["To"] = to_whom
    message["Subject"] = subject

    if is_html:
        message.set_content(
            "This is an HTML email. Please view in an HTML-compatible email client."
        )
        message.add_alternative(body, subtype="html")
    else:
        message.set_content(body)

    await aiosmtplib.send(
        message,
        hostname=EMAIL_HOST,
        port=EMAIL_PORT,
        start_tls=True,
        username=EMAIL_USERNAME,
        password=EMAIL_PASSWORD,
    )
