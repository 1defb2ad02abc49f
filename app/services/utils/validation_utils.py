from __future__ import annotations

from app.core.constants import EMAIL_RE, PHONE_RE
from app.domain.enums import IdentifierKind


def classify_identifier(identifier: str | None) -> IdentifierKind:
    value = identifier or ""
    if EMAIL_RE.fullmatch(value):
        return IdentifierKind.email
    if PHONE_RE.fullmatch(value):
        return IdentifierKind.phone
    return IdentifierKind.invalid


def anonymize_email(email: str | None) -> str:
    if not email:
        return ""
    email = email.strip()
    if not email:
        return ""
    if "@" not in email:
        return "***"
    local, domain = email.split("@", 1)
    if not local:
        masked_local = "***"
    elif len(local) == 1:
        masked_local = local + "***"
    elif len(local) == 2:
        masked_local = local[0] + "***"
    else:
        masked_local = local[0] + "***" + local[-1]
    return f"{masked_local}@{domain}"


def anonymize_identifier(identifier: str | None) -> str:
    value = (identifier or "").strip()
    if "@" in value:
        return anonymize_email(value)
    if len(value) <= 4:
        return "***"
    return "***" + value[-4:]
