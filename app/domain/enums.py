from enum import Enum


class UserRole(str, Enum):
    user = "user"
    admin = "admin"

class IdentifierKind(str, Enum):
    email = "email"
    phone = "phone"
    invalid = "invalid"

class VerificationOutcome(str, Enum):
    verified = "verified"
    verified_email_failed = "verified_email_failed"
