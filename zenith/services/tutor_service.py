"""Tutor applications: submission and admin review."""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from zenith.core.exceptions import ConflictError, InvalidTransitionError, ValidationError
from zenith.core.logging import get_logger, log_success, log_transition
from zenith.crud.notification import notification_crud
from zenith.crud.tutor import tutor_application_crud
from zenith.crud.user import user_crud
from zenith.models.tutor import TutorApplication, TutorApplicationStatus
from zenith.models.user import User
from zenith.schemas.tutor import TutorApplicationCreate, TutorReviewRequest
from zenith.services.audit import RequestMeta, record_admin_action
from zenith.services.cache_service import cache

logger = get_logger(__name__)

REVIEW_ACTIONS = {
    "approve": TutorApplicationStatus.APPROVED,
    "reject": TutorApplicationStatus.REJECTED,
}


class TutorService:
    """Submit and review tutor applications."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def apply(self, user: User, application_in: TutorApplicationCreate) -> TutorApplication:
        """Submit an application. Only one may be pending per user."""
        if await tutor_application_crud.get_pending_for_user(self.db, user.id):
            raise ConflictError("You already have a pending tutor application")

        modules = [m.strip() for m in application_in.modules if m.strip()]
        if not modules:
            raise ValidationError("At least one module is required", field="modules")

        data = application_in.model_dump()
        data["modules"] = modules
        application = await tutor_application_crud.create(
            self.db,
            obj_in={**data, "user_id": user.id, "status": TutorApplicationStatus.PENDING},
        )
        await cache.invalidate_dashboard()
        log_success(logger, f"Tutor application {application.id} submitted by user {user.id}")
        return application

    async def review(
        self,
        application_id: int,
        admin: User,
        review: TutorReviewRequest,
        meta: Optional[RequestMeta] = None,
    ) -> TutorApplication:
        """Approve or reject a pending application."""
        target = REVIEW_ACTIONS.get((review.action or "").strip().lower())
        if target is None:
            raise ValidationError(
                "Invalid action. Must be 'approve' or 'reject'", field="action"
            )

        reason = (review.rejection_reason or "").strip()
        if target == TutorApplicationStatus.REJECTED and not reason:
            raise ValidationError(
                "Rejection reason is required when rejecting an application",
                field="rejection_reason",
            )

        application = await tutor_application_crud.get_or_404(self.db, application_id)
        if application.status != TutorApplicationStatus.PENDING:
            raise InvalidTransitionError(
                "tutor application", application.status.value, target.value
            )

        old_status = application.status.value
        application.status = target
        application.reviewed_by_id = admin.id
        application.reviewed_at = datetime.now(timezone.utc)
        application.verification_notes = review.verification_notes
        application.rejection_reason = reason if target == TutorApplicationStatus.REJECTED else None
        application = await tutor_application_crud.save(self.db, application)

        applicant = await user_crud.get(self.db, application.user_id)
        if target == TutorApplicationStatus.APPROVED:
            if applicant is not None:
                applicant.is_tutor = True
                applicant.tutor_verified = True
                await user_crud.save(self.db, applicant)
            await notification_crud.notify(
                self.db,
                user_id=application.user_id,
                type="tutor_approved",
                title="Tutor application approved",
                message="Congratulations! You are now a verified tutor.",
                metadata={"application_id": application.id},
            )
        else:
            await notification_crud.notify(
                self.db,
                user_id=application.user_id,
                type="tutor_rejected",
                title="Tutor application rejected",
                message=f"Your tutor application was not approved: {reason}",
                metadata={"application_id": application.id, "reason": reason},
            )

        await record_admin_action(
            self.db,
            admin,
            action=f"{'APPROVE' if target == TutorApplicationStatus.APPROVED else 'REJECT'}_TUTOR_APPLICATION",
            target_type="tutor_application",
            target_id=application.id,
            old_values={"status": old_status},
            new_values={
                "status": target.value,
                "rejection_reason": application.rejection_reason,
                "verification_notes": application.verification_notes,
            },
            meta=meta,
        )
        await cache.invalidate_dashboard()

        log_transition(logger, "tutor application", application.id, old_status, target.value, admin.id)
        return application
