import uuid
from datetime import datetime, timezone

import bcrypt
import pytest

from app.core.config import settings
from app.core.exceptions import (
    CodeMismatchError,
    ConflictError,
    InternalError,
    NotFoundError,
    ValidationError,
)

from app.domain.enums import IdentifierKind, UserRole, VerificationOutcome


@pytest.mark.parametrize(
    "name,identifier,password",
    [("", "a@b.com", "p"), ("A", "", "p"), ("A", "a@b.com", ""), (None, None, None), ("   ", "a@b.com", "p")],
)
async def test_register_rejects_missing_fields(signup_service, users, mailer, name, identifier, password):
    with pytest.raises(ValidationError):
        await signup_service.register(name, identifier, password)
    assert users.rows == {}
    assert mailer.verification == []


async def test_register_rejects_unclassifiable_identifier(signup_service, users):
    with pytest.raises(ValidationError) as exc:
        await signup_service.register("A", "not-an-identifier", "p")
    assert exc.value.message == "Invalid email or phone number format"
    assert users.rows == {}


async def test_register_new_email_sends_code(signup_service, users, mailer, session):
    result = await signup_service.register("A", "a@b.com", "p")

    assert result.kind is IdentifierKind.email
    assert result.message == "Verification code sent successfully"
    assert list(users.rows) == [result.user_id]

    user = users.rows[result.user_id]
    assert user.email == "a@b.com"
    assert user.phone_number is None
    assert user.role is UserRole.user
    assert user.email_verified is None
    assert user.verification_code == "100001"
    assert bcrypt.checkpw(b"p", user.password_hash.encode())
    assert user.password_hash != "p"
    assert mailer.verification == [("a@b.com", "100001")]
    assert session.commits == 1


async def test_register_new_phone_is_verified_immediately(signup_service, users, mailer):
    result = await signup_service.register("B", "01712345678", "p")

    assert result.message == "User registered successfully"
    user = users.rows[result.user_id]
    assert user.phone_number == "01712345678"
    assert user.email is None
    assert user.email_verified is not None
    assert user.verification_code is None
    assert mailer.verification == []


async def test_reregister_unverified_email_overwrites_and_issues_new_code(signup_service, users, mailer):
    first = await signup_service.register("A", "a@b.com", "old")
    second = await signup_service.register("Alice", "a@b.com", "new")

    assert second.user_id == first.user_id
    assert len(users.rows) == 1
    user = users.rows[first.user_id]
    assert user.name == "Alice"
    assert bcrypt.checkpw(b"new", user.password_hash.encode())
    assert user.verification_code == "100002"
    assert user.email_verified is None
    assert [code for _, code in mailer.verification] == ["100001", "100002"]


async def test_register_verified_account_conflicts_without_mutation(signup_service, users, mailer, session):
    first = await signup_service.register("B", "+8801712345678", "p")
    user = users.rows[first.user_id]
    snapshot = (user.name, user.password_hash, user.email_verified)
    writes = users.writes

    with pytest.raises(ConflictError):
        await signup_service.register("Other", "+8801712345678", "q")

    assert (user.name, user.password_hash, user.email_verified) == snapshot
    assert users.writes == writes
    assert session.rollbacks == 1


async def test_reregister_unverified_phone_updates_name_and_password(signup_service, users):
    result = await signup_service.register("B", "01712345678", "p")
    user = users.rows[result.user_id]
    user.email_verified = None

    again = await signup_service.register("Bob", "01712345678", "q")

    assert again.user_id == result.user_id
    assert user.name == "Bob"
    assert bcrypt.checkpw(b"q", user.password_hash.encode())
    assert user.email_verified is not None
    assert user.verification_code is None


async def test_register_mail_failure_is_internal_and_rolled_back(signup_service, mailer, session):
    mailer.fail_verification = True

    with pytest.raises(InternalError):
        await signup_service.register("A", "a@b.com", "p")

    assert session.commits == 0
    assert session.rollbacks == 1


async def test_register_store_failure_is_internal(signup_service, users):
    users.fail_on_lookup = True
    with pytest.raises(InternalError):
        await signup_service.register("A", "a@b.com", "p")


async def test_register_lost_uniqueness_race_is_conflict(signup_service, users):
    users.race_on_create = True
    with pytest.raises(ConflictError):
        await signup_service.register("A", "a@b.com", "p")


async def test_verify_unknown_user(signup_service):
    with pytest.raises(NotFoundError):
        await signup_service.verify(str(uuid.uuid4()), "123456")


async def test_verify_malformed_user_id_is_not_found(signup_service):
    with pytest.raises(NotFoundError):
        await signup_service.verify("not-a-uuid", "123456")


async def test_verify_wrong_code_leaves_account_unverified(signup_service, users, subscribers):
    result = await signup_service.register("A", "a@b.com", "p")
    user = users.rows[result.user_id]

    with pytest.raises(CodeMismatchError):
        await signup_service.verify(str(result.user_id), "000000")

    assert user.email_verified is None
    assert user.verification_code == "100001"
    assert subscribers.emails == []


async def test_verify_correct_code(signup_service, users, subscribers, mailer):
    result = await signup_service.register("A", "a@b.com", "p")

    outcome = await signup_service.verify(str(result.user_id), "100001")

    user = users.rows[result.user_id]
    assert outcome.outcome is VerificationOutcome.verified
    assert outcome.message == "User verified successfully"
    assert isinstance(user.email_verified, datetime)
    assert user.email_verified.tzinfo is timezone.utc
    assert user.verification_code is None
    assert subscribers.emails == ["a@b.com"]
    assert mailer.registration == ["a@b.com"]


async def test_verify_coerces_numeric_code(signup_service, users):
    result = await signup_service.register("A", "a@b.com", "p")
    outcome = await signup_service.verify(result.user_id, 100001)
    assert outcome.outcome is VerificationOutcome.verified


async def test_verify_subscribes_only_once(signup_service, subscribers):
    subscribers.emails.append("a@b.com")
    result = await signup_service.register("A", "a@b.com", "p")

    await signup_service.verify(str(result.user_id), "100001")

    assert subscribers.emails == ["a@b.com"]


async def test_verify_code_cannot_be_reused(signup_service):
    result = await signup_service.register("A", "a@b.com", "p")
    await signup_service.verify(str(result.user_id), "100001")

    with pytest.raises(CodeMismatchError):
        await signup_service.verify(str(result.user_id), "100001")


async def test_verify_welcome_email_failure_is_degraded_success(signup_service, users, mailer, subscribers):
    mailer.fail_registration = True
    result = await signup_service.register("A", "a@b.com", "p")

    outcome = await signup_service.verify(str(result.user_id), "100001")

    assert outcome.outcome is VerificationOutcome.verified_email_failed
    assert outcome.message == "Registration successful, but welcome email could not be sent."
    assert users.rows[result.user_id].email_verified is not None
    assert subscribers.emails == ["a@b.com"]


async def test_too_many_wrong_codes_revoke_the_code(signup_service, users):
    result = await signup_service.register("A", "a@b.com", "p")
    user = users.rows[result.user_id]

    for _ in range(settings.max_verification_attempts - 1):
        with pytest.raises(CodeMismatchError):
            await signup_service.verify(str(result.user_id), "000000")
    assert user.verification_code == "100001"

    with pytest.raises(CodeMismatchError) as exc:
        await signup_service.verify(str(result.user_id), "000000")
    assert user.verification_code is None
    assert "register again" in exc.value.message

    with pytest.raises(CodeMismatchError):
        await signup_service.verify(str(result.user_id), "100001")
    assert user.email_verified is None

    await signup_service.register("A", "a@b.com", "p")
    assert user.verification_attempts == 0
    outcome = await signup_service.verify(str(result.user_id), "100002")
    assert outcome.outcome is VerificationOutcome.verified
