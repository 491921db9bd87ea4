"""User document verification."""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from zenith.core.exceptions import ValidationError
from zenith.core.logging import get_logger, log_success
from zenith.crud.notification import notification_crud
from zenith.crud.user import user_crud
from zenith.models.user import User
from zenith.schemas.admin import VerificationReviewRequest
from zenith.schemas.user import VerificationUpload
from zenith.services.audit import RequestMeta, record_admin_action

logger = get_logger(__name__)


async def notify_verification_approved(db: AsyncSession, user: User) -> None:
    await notification_crud.notify(
        db,
        user_id=user.id,
        type="verification_approved",
        title="Account verified",
        message="Your documents have been verified. Your account is now fully verified.",
    )


class VerificationService:
    """Document upload by users and review by admins."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def upload_documents(self, user: User, upload: VerificationUpload) -> User:
        """
        Store document URLs on the user.

        Once both a student card and an ID document are present the user
        joins the verification queue; any earlier decision is cleared.
        """
        for field, value in upload.model_dump(exclude_unset=True).items():
            if value:
                setattr(user, field, value)

        if user.student_card_url and user.id_document_url:
            user.documents_uploaded = True
            user.admin_verified = False
            user.verified_at = None

        user = await user_crud.save(self.db, user)
        log_success(logger, f"User {user.id} uploaded verification documents")
        return user

    async def review(
        self,
        user_id: int,
        admin: User,
        review: VerificationReviewRequest,
        meta: Optional[RequestMeta] = None,
    ) -> User:
        """Approve or reject a user's uploaded documents."""
        action = (review.action or "").strip().lower()
        if action not in ("approve", "reject"):
            raise ValidationError("Invalid action. Must be 'approve' or 'reject'", field="action")

        reason = (review.rejection_reason or "").strip()
        if action == "reject" and not reason:
            raise ValidationError("A rejection reason is required", field="rejection_reason")

        user = await user_crud.get_or_404(self.db, user_id)
        old_values = {
            "admin_verified": user.admin_verified,
            "documents_uploaded": user.documents_uploaded,
        }

        if action == "approve":
            user.admin_verified = True
            user.verified_at = datetime.now(timezone.utc)
            user.verification_notes = review.verification_notes
        else:
            # Documents must be uploaded again before the next review
            user.admin_verified = False
            user.documents_uploaded = False
            user.verified_at = None
            user.verification_notes = reason
        user = await user_crud.save(self.db, user)

        if action == "approve":
            await notify_verification_approved(self.db, user)
        else:
            await notification_crud.notify(
                self.db,
                user_id=user.id,
                type="verification_rejected",
                title="Verification rejected",
                message=f"Your documents could not be verified: {reason}",
                metadata={"reason": reason},
            )

        await record_admin_action(
            self.db,
            admin,
            action="VERIFY_USER" if action == "approve" else "REJECT_USER_VERIFICATION",
            target_type="user",
            target_id=user.id,
            old_values=old_values,
            new_values={
                "admin_verified": user.admin_verified,
                "documents_uploaded": user.documents_uploaded,
            },
            meta=meta,
        )
        log_success(logger, f"User {user.id} verification {action}d by admin {admin.id}")
        return user
