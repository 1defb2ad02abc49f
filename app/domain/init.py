from app.domain.enums import (
    UserRole,
    IdentifierKind,
    VerificationOutcome,
)
from app.domain.user_model import User
from app.domain.subscriber_model import Subscriber
from app.domain.pending_application_model import PendingApplication
from app.domain.orphaned_asset_model import OrphanedAsset

__all__ = [
    "UserRole",
    "IdentifierKind",
    "VerificationOutcome",
    "User",
    "Subscriber",
    "PendingApplication",
    "OrphanedAsset",
]
