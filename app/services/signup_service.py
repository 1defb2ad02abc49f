from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.constants import (
    MSG_ALREADY_REGISTERED,
    MSG_CODE_SENT,
    MSG_INVALID_CODE,
    MSG_INVALID_IDENTIFIER,
    MSG_MISSING_FIELDS,
    MSG_REGISTERED,
    MSG_TOO_MANY_ATTEMPTS,
    MSG_USER_NOT_FOUND,
    MSG_VERIFIED,
    MSG_VERIFIED_EMAIL_FAILED,
)
from app.core.exceptions import (
    AppError,
    CodeMismatchError,
    ConflictError,
    InternalError,
    NotFoundError,
    ValidationError,
)
from app.core.security import hash_password, six_digit_code
from app.domain.enums import IdentifierKind, UserRole, VerificationOutcome
from app.domain.user_model import User
from app.repositories.subscriber_repository import SubscriberRepository
from app.repositories.user_repository import UserRepository
from app.services.email_service import Mailer
from app.services.utils.validation_utils import (
    anonymize_email,
    anonymize_identifier,
    classify_identifier,
)

logger = logging.getLogger("portal.signup_service")


@dataclass
class RegistrationResult:
    message: str
    user_id: uuid.UUID
    kind: IdentifierKind


@dataclass
class VerificationResult:
    outcome: VerificationOutcome
    message: str


class SignupService:
    """Two-step signup: register an email or phone identifier, then confirm the emailed code."""

    def __init__(
        self,
        session: AsyncSession,
        mailer: Mailer | None = None,
        code_generator: Callable[[], str] = six_digit_code,
    ):
        self.session = session
        self.user_repo = UserRepository(session)
        self.subscriber_repo = SubscriberRepository(session)
        self.mailer = mailer or Mailer()
        self.code_generator = code_generator

    async def register(self, name: str | None, identifier: str | None, password: str | None) -> RegistrationResult:
        name = (name or "").strip()
        identifier = (identifier or "").strip()
        if not name or not identifier or not password:
            raise ValidationError(MSG_MISSING_FIELDS)

        kind = classify_identifier(identifier)
        if kind == IdentifierKind.invalid:
            raise ValidationError(MSG_INVALID_IDENTIFIER)

        masked = anonymize_identifier(identifier)
        logger.info(f"Register attempt for {kind.value}: {masked}")

        try:
            pwd_hash = hash_password(password)
        except Exception as exc:
            logger.error(f"Password hashing failed for {masked}: {exc}")
            raise InternalError()

        try:
            if kind == IdentifierKind.email:
                user = await self.user_repo.get_by_email(identifier)
            else:
                user = await self.user_repo.get_by_phone(identifier)

            if user is not None and user.is_verified:
                logger.info(f"Register rejected: {masked} is already registered")
                raise ConflictError(MSG_ALREADY_REGISTERED)

            code = self.code_generator() if kind == IdentifierKind.email else None
            verified_at = datetime.now(timezone.utc) if kind == IdentifierKind.phone else None

            if user is None:
                user = await self.user_repo.create(
                    User(
                        name=name,
                        email=identifier if kind == IdentifierKind.email else None,
                        phone_number=identifier if kind == IdentifierKind.phone else None,
                        role=UserRole.user,
                        password_hash=pwd_hash,
                        email_verified=verified_at,
                        verification_code=code,
                        verification_attempts=0,
                    )
                )
                logger.info(f"Account created for {masked}, ID: {user.id}")
            else:
                user.name = name
                user.password_hash = pwd_hash
                user.email_verified = verified_at
                user.verification_code = code
                user.verification_attempts = 0
                user = await self.user_repo.update(user)
                logger.info(f"Unverified account {user.id} re-submitted, details overwritten")

            # The code is only committed once the mail is out.
            if code is not None:
                await self.mailer.send_verification_email(identifier, code)

            await self.session.commit()
        except AppError:
            await self.session.rollback()
            raise
        except IntegrityError:
            await self.session.rollback()
            logger.info(f"Register rejected: concurrent registration for {masked}")
            raise ConflictError(MSG_ALREADY_REGISTERED)
        except Exception as exc:
            await self.session.rollback()
            logger.error(f"Registration failed for {masked}: {exc}")
            raise InternalError()

        message = MSG_CODE_SENT if kind == IdentifierKind.email else MSG_REGISTERED
        return RegistrationResult(message=message, user_id=user.id, kind=kind)

    async def verify(self, user_id: str | uuid.UUID | None, code: Any) -> VerificationResult:
        try:
            uid = user_id if isinstance(user_id, uuid.UUID) else uuid.UUID(str(user_id))
        except ValueError:
            raise NotFoundError(MSG_USER_NOT_FOUND)

        try:
            user = await self.user_repo.get_by_id(uid)
            if user is None:
                logger.warning(f"Verify failed: user {uid} not found")
                raise NotFoundError(MSG_USER_NOT_FOUND)

            submitted = str(code)
            if user.verification_code is None or user.verification_code != submitted:
                await self._register_failed_attempt(user)
                await self.session.commit()
                if user.verification_code is None and user.verification_attempts >= settings.max_verification_attempts:
                    raise CodeMismatchError(MSG_TOO_MANY_ATTEMPTS)
                raise CodeMismatchError(MSG_INVALID_CODE)

            user.email_verified = datetime.now(timezone.utc)
            user.verification_code = None
            user.verification_attempts = 0
            await self.user_repo.update(user)
            await self.session.commit()
            logger.info(f"User {user.id} verified")

            if user.email:
                if await self.subscriber_repo.get_by_email(user.email) is None:
                    await self.subscriber_repo.ensure(user.email)
                    await self.session.commit()
        except AppError:
            await self.session.rollback()
            raise
        except Exception as exc:
            await self.session.rollback()
            logger.error(f"Verification failed for user {uid}: {exc}")
            raise InternalError()

        if user.email:
            try:
                await self.mailer.send_registration_email(user.email)
            except Exception as exc:
                logger.error(
                    f"Failed to send welcome email to {anonymize_email(user.email)}: {exc}"
                )
                return VerificationResult(
                    outcome=VerificationOutcome.verified_email_failed,
                    message=MSG_VERIFIED_EMAIL_FAILED,
                )

        return VerificationResult(outcome=VerificationOutcome.verified, message=MSG_VERIFIED)

    async def _register_failed_attempt(self, user: User) -> None:
        user.verification_attempts = (user.verification_attempts or 0) + 1
        if user.verification_attempts >= settings.max_verification_attempts:
            # Revoked codes force a fresh registration to get a new one.
            user.verification_code = None
        logger.warning(
            f"Invalid verification code for user {user.id} "
            f"(attempt {user.verification_attempts})"
        )
        await self.user_repo.update(user)
