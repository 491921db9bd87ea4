"""Listing workflow: submission, admin approval and the seller-side lifecycle.

Status changes follow ``LISTING_TRANSITIONS``:

    pending ──approve──▶ active ──sell──▶ sold
       └────reject────▶ rejected

``sold`` and ``rejected`` are terminal. Anything else raises
``InvalidTransitionError`` (HTTP 409).
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from zenith.core.exceptions import (
    InvalidTransitionError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from zenith.core.logging import get_logger, log_success, log_transition, log_warn
from zenith.crud.notification import notification_crud
from zenith.crud.product import category_crud, product_crud
from zenith.crud.user import user_crud
from zenith.models.product import Product, ProductStatus
from zenith.models.user import User
from zenith.schemas.product import ProductCreate
from zenith.services.audit import RequestMeta, record_admin_action
from zenith.services.cache_service import cache

logger = get_logger(__name__)


def ensure_transition(product: Product, target: ProductStatus) -> None:
    """Raise if ``product`` may not move to ``target``."""
    if not product.can_transition_to(target):
        raise InvalidTransitionError("product", product.status.value, target.value)


class ListingService:
    """Create listings and move them through their lifecycle."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def submit(self, seller: User, listing_in: ProductCreate) -> Product:
        """Create a listing in ``pending`` and tell the admins about it."""
        category = await category_crud.get_or_create(self.db, listing_in.category)
        product = await product_crud.create_listing(
            self.db,
            obj_in=listing_in,
            seller_id=seller.id,
            category_id=category.id,
        )

        await notification_crud.notify(
            self.db,
            user_id=seller.id,
            type="listing_submitted",
            title="Listing submitted",
            message=f'"{product.title}" is waiting for admin approval.',
            metadata={"product_id": product.id},
        )
        admins = await user_crud.get_active_admins(self.db)
        await notification_crud.notify_many(
            self.db,
            user_ids=[admin.id for admin in admins if admin.id != seller.id],
            type="listing_approval",
            title="New listing to review",
            message=f'{seller.full_name} submitted "{product.title}".',
            metadata={"product_id": product.id, "seller_id": seller.id},
        )
        await cache.invalidate_dashboard()

        log_success(logger, f"Listing {product.id} submitted by user {seller.id}")
        return product

    async def review(
        self,
        product_id: int,
        admin: User,
        *,
        approved: bool,
        rejection_reason: Optional[str] = None,
        verification_notes: Optional[str] = None,
        meta: Optional[RequestMeta] = None,
    ) -> Product:
        """Approve (``pending -> active``) or reject (``pending -> rejected``)."""
        product = await product_crud.get_or_404(self.db, product_id)

        reason = (rejection_reason or "").strip()
        if not approved and not reason:
            raise ValidationError("A rejection reason is required", field="rejection_reason")

        target = ProductStatus.ACTIVE if approved else ProductStatus.REJECTED
        ensure_transition(product, target)

        old_status = product.status.value
        now = datetime.now(timezone.utc)
        product.status = target
        if verification_notes is not None:
            product.verification_notes = verification_notes
        if approved:
            product.admin_approved = True
            product.approved_by_id = admin.id
            product.approved_at = now
            product.rejection_reason = None
        else:
            product.admin_approved = False
            product.rejection_reason = reason

        product = await product_crud.save(self.db, product)

        if approved:
            await notification_crud.notify(
                self.db,
                user_id=product.seller_id,
                type="product_approved",
                title="Listing approved",
                message=f'Your listing "{product.title}" is now live.',
                metadata={"product_id": product.id},
            )
        else:
            await notification_crud.notify(
                self.db,
                user_id=product.seller_id,
                type="product_rejected",
                title="Listing rejected",
                message=f'Your listing "{product.title}" was rejected: {reason}',
                metadata={"product_id": product.id, "reason": reason},
            )

        await record_admin_action(
            self.db,
            admin,
            action="APPROVE_PRODUCT" if approved else "REJECT_PRODUCT",
            target_type="product",
            target_id=product.id,
            old_values={"status": old_status},
            new_values={
                "status": target.value,
                "rejection_reason": product.rejection_reason,
                "verification_notes": product.verification_notes,
            },
            meta=meta,
        )
        await cache.invalidate_dashboard()

        log_transition(logger, "listing", product.id, old_status, target.value, admin.id)
        return product

    async def get_visible(self, product_id: int, viewer: Optional[User]) -> Product:
        """
        Fetch a listing for display.

        Active and sold listings are public. Pending and rejected ones are
        only shown to their seller and to admins; everyone else gets a 404.
        """
        product = await product_crud.get_or_404(self.db, product_id)
        if product.status in (ProductStatus.ACTIVE, ProductStatus.SOLD):
            return product
        if viewer is not None and (viewer.id == product.seller_id or viewer.is_admin):
            return product
        raise NotFoundError("product", product_id)

    async def change_status(
        self,
        product_id: int,
        seller: User,
        target: ProductStatus,
    ) -> Product:
        """Seller-initiated status change. Only ``active -> sold`` is allowed."""
        product = await product_crud.get_or_404(self.db, product_id)
        if product.seller_id != seller.id:
            raise PermissionDeniedError("You can only update your own listings")
        if target != ProductStatus.SOLD:
            raise InvalidTransitionError("product", product.status.value, target.value)
        return await self.mark_sold(product)

    async def mark_sold(self, product: Product) -> Product:
        """Move an active listing to ``sold``."""
        ensure_transition(product, ProductStatus.SOLD)
        old_status = product.status.value
        product.status = ProductStatus.SOLD
        product.sold_at = datetime.now(timezone.utc)
        product = await product_crud.save(self.db, product)
        await cache.invalidate_dashboard()
        log_transition(logger, "listing", product.id, old_status, ProductStatus.SOLD.value)
        return product

    async def delete_own(self, product_id: int, seller: User) -> None:
        """A seller removes their own listing. Sold listings are kept."""
        product = await product_crud.get_or_404(self.db, product_id)
        if product.seller_id != seller.id:
            raise PermissionDeniedError("You can only delete your own listings")
        if product.status == ProductStatus.SOLD:
            log_warn(logger, f"Refused delete of sold listing {product.id}")
            raise InvalidTransitionError("product", product.status.value, "deleted")
        await product_crud.remove(self.db, db_obj=product)
        await cache.invalidate_dashboard()

    async def delete_as_admin(
        self,
        product_id: int,
        admin: User,
        meta: Optional[RequestMeta] = None,
    ) -> None:
        product = await product_crud.get_or_404(self.db, product_id)
        snapshot = {"title": product.title, "status": product.status.value, "seller_id": product.seller_id}
        await product_crud.remove(self.db, db_obj=product)
        await record_admin_action(
            self.db,
            admin,
            action="DELETE_PRODUCT",
            target_type="product",
            target_id=product_id,
            old_values=snapshot,
            meta=meta,
        )
        await cache.invalidate_dashboard()
        log_success(logger, f"Listing {product_id} deleted by admin {admin.id}")
