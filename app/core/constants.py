import re

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

PHONE_RE = re.compile(r"^(\+?[1-9]\d{1,14}|0\d{9,15})$")

RESEND_API = "https://api.resend.com/emails"

CLOUDINARY_API = "https://api.cloudinary.com/v1_1"

MSG_MISSING_FIELDS = "Missing name, email, or password"
MSG_INVALID_IDENTIFIER = "Invalid email or phone number format"
MSG_ALREADY_REGISTERED = "User is already registered"
MSG_CODE_SENT = "Verification code sent successfully"
MSG_REGISTERED = "User registered successfully"
MSG_USER_NOT_FOUND = "User not found"
MSG_INVALID_CODE = "Invalid verification code"
MSG_TOO_MANY_ATTEMPTS = "Too many invalid attempts. Please register again to get a new code."
MSG_VERIFIED = "User verified successfully"
MSG_VERIFIED_EMAIL_FAILED = "Registration successful, but welcome email could not be sent."
MSG_INTERNAL = "Internal server error"
MSG_UNAUTHORIZED = "Unauthorized"
