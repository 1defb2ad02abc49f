from __future__ import annotations

import html

import httpx

from app.core.config import settings
from app.core.constants import RESEND_API


class EmailError(RuntimeError):
    pass


async def send_email(to: str, subject: str, html_body: str) -> None:
    if not settings.resend_api_key or not settings.resend_from:
        raise EmailError("Resend is not configured")

    payload = {
        "from": settings.resend_from,
        "to": [to],
        "subject": subject,
        "html": html_body,
    }
    headers = {"Authorization": f"Bearer {settings.resend_api_key}"}

    async with httpx.AsyncClient(timeout=settings.http_timeout) as client:
        r = await client.post(RESEND_API, json=payload, headers=headers)
        if r.status_code >= 400:
            try:
                err = r.json()
            except ValueError:
                err = {"error": r.text}
            raise EmailError(f"Failed to send email: {err}")


def verification_email_html(code: str) -> str:
    code_fmt = " ".join(html.escape(code))
    return f"""
<!doctype html>
<html>
  <body style="font-family:Arial,sans-serif;background:#f4f6f8;padding:24px;color:#1f2933">
    <div style="max-width:520px;margin:0 auto;background:#ffffff;border-radius:12px;padding:24px">
      <h2 style="margin:0 0 8px;">Verify your email</h2>
      <p style="opacity:.9;">Enter the code below to finish creating your account.</p>
      <div style="letter-spacing:.5rem;font-size:28px;font-weight:700;background:#e8f0fe;
                  padding:14px 18px;border-radius:10px;display:inline-block;margin:12px 0;">
        {code_fmt}
      </div>
      <p style="opacity:.8;">If you did not request this code you can safely ignore this message.
      </br>Please do not share this code with anyone.</p>
    </div>
  </body>
</html>
    """.strip()


def registration_email_html(email: str) -> str:
    email = html.escape(email or "")
    return f"""
<!doctype html>
<html>
  <body style="font-family:Arial,sans-serif;background:#f4f6f8;padding:24px;color:#1f2933">
    <div style="max-width:520px;margin:0 auto;background:#ffffff;border-radius:12px;padding:24px">
      <h2 style="margin:0 0 8px;">Welcome aboard</h2>
      <p style="opacity:.9;">Your account <b>{email}</b> is verified and ready to use.</p>
      <p style="opacity:.8;">You are now subscribed to our updates about new courses and designs.</p>
    </div>
  </body>
</html>
    """.strip()


class Mailer:
    async def send_verification_email(self, email: str, code: str) -> None:
        await send_email(email, "Your verification code", verification_email_html(code))

    async def send_registration_email(self, email: str) -> None:
        await send_email(email, "Registration successful", registration_email_html(email))
