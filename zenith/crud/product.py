"""CRUD operations for Category and Product models."""

import re
from typing import Dict, List, Optional, Tuple
from pydantic import BaseModel
from sqlalchemy import select, or_, func
from sqlalchemy.ext.asyncio import AsyncSession

from zenith.crud.base import CRUDBase
from zenith.models.product import Category, Product, ProductStatus, ProductCondition
from zenith.schemas.product import ProductCreate, ProductStatusUpdate

SORT_FIELDS = {
    "created_at": Product.created_at,
    "price": Product.price,
    "title": Product.title,
}


def slugify(value: str) -> str:
    """Lower-case, hyphen-separated slug."""
    slug = re.sub(r"[^a-z0-9]+", "-", value.strip().lower())
    return slug.strip("-") or "other"


class CRUDCategory(CRUDBase[Category, BaseModel, BaseModel]):
    """CRUD operations for Category model."""

    async def get_by_slug(
        self,
        db: AsyncSession,
        slug: str
    ) -> Optional[Category]:
        """Get category by slug."""
        result = await db.execute(
            select(Category).where(Category.slug == slugify(slug))
        )
        return result.scalar_one_or_none()

    async def get_or_create(
        self,
        db: AsyncSession,
        name_or_slug: str
    ) -> Category:
        """Return the category for a slug, creating it on first use."""
        existing = await self.get_by_slug(db, name_or_slug)
        if existing:
            return existing

        slug = slugify(name_or_slug)
        category = Category(
            name=slug.replace("-", " ").title(),
            slug=slug,
        )
        return await self.save(db, category)

    async def get_all(self, db: AsyncSession) -> List[Category]:
        """All categories, alphabetical."""
        result = await db.execute(select(Category).order_by(Category.name))
        return list(result.scalars().all())


class CRUDProduct(CRUDBase[Product, ProductCreate, ProductStatusUpdate]):
    """CRUD operations for Product model."""

    async def create_listing(
        self,
        db: AsyncSession,
        *,
        obj_in: ProductCreate,
        seller_id: int,
        category_id: int
    ) -> Product:
        """Insert a new listing in ``pending`` state."""
        data = obj_in.model_dump(exclude={"category"})
        db_obj = Product(
            **data,
            seller_id=seller_id,
            category_id=category_id,
            status=ProductStatus.PENDING,
            admin_approved=False,
        )
        await self.save(db, db_obj)
        # Load relationships now; lazy loads are not available under asyncio
        await db.refresh(db_obj, attribute_names=["seller", "category"])
        return db_obj

    async def search_active(
        self,
        db: AsyncSession,
        *,
        category: Optional[str] = None,
        min_price: Optional[float] = None,
        max_price: Optional[float] = None,
        condition: Optional[ProductCondition] = None,
        location: Optional[str] = None,
        university: Optional[str] = None,
        search: Optional[str] = None,
        sort_by: str = "created_at",
        sort_order: str = "desc",
        skip: int = 0,
        limit: int = 20
    ) -> Tuple[List[Product], int]:
        """Public marketplace query. Only ``active`` listings are returned."""
        stmt = select(Product).where(Product.status == ProductStatus.ACTIVE)

        if category:
            stmt = stmt.join(Category, Product.category_id == Category.id).where(
                Category.slug == slugify(category)
            )
        if min_price is not None:
            stmt = stmt.where(Product.price >= min_price)
        if max_price is not None:
            stmt = stmt.where(Product.price <= max_price)
        if condition is not None:
            stmt = stmt.where(Product.condition == condition)
        if location:
            stmt = stmt.where(Product.location.ilike(f"%{location.strip()}%"))
        if university:
            stmt = stmt.where(Product.university.ilike(f"%{university.strip()}%"))
        if search:
            term = f"%{search.strip()}%"
            stmt = stmt.where(
                or_(
                    Product.title.ilike(term),
                    Product.description.ilike(term)
                )
            )

        total = (
            await db.execute(select(func.count()).select_from(stmt.subquery()))
        ).scalar_one()

        column = SORT_FIELDS.get(sort_by, Product.created_at)
        ordering = column.asc() if sort_order == "asc" else column.desc()
        result = await db.execute(
            stmt.order_by(ordering, Product.id.desc()).offset(skip).limit(limit)
        )
        return list(result.scalars().all()), total

    async def get_by_status(
        self,
        db: AsyncSession,
        *,
        status: Optional[ProductStatus] = None,
        skip: int = 0,
        limit: int = 20
    ) -> Tuple[List[Product], int]:
        """Listings in any (or one) status, newest first."""
        stmt = select(Product)
        if status is not None:
            stmt = stmt.where(Product.status == status)

        total = (
            await db.execute(select(func.count()).select_from(stmt.subquery()))
        ).scalar_one()
        result = await db.execute(
            stmt.order_by(Product.created_at.desc(), Product.id.desc()).offset(skip).limit(limit)
        )
        return list(result.scalars().all()), total

    async def get_pending(self, db: AsyncSession) -> List[Product]:
        """The whole approval queue, newest first."""
        result = await db.execute(
            select(Product)
            .where(Product.status == ProductStatus.PENDING)
            .order_by(Product.created_at.desc(), Product.id.desc())
        )
        return list(result.scalars().all())

    async def get_by_seller(
        self,
        db: AsyncSession,
        *,
        seller_id: int,
        status: Optional[ProductStatus] = None,
        limit: int = 100
    ) -> List[Product]:
        """A seller's listings, newest first."""
        stmt = select(Product).where(Product.seller_id == seller_id)
        if status is not None:
            stmt = stmt.where(Product.status == status)
        result = await db.execute(
            stmt.order_by(Product.created_at.desc(), Product.id.desc()).limit(limit)
        )
        return list(result.scalars().all())

    async def count_by_seller(
        self,
        db: AsyncSession,
        *,
        seller_id: int,
        status: Optional[ProductStatus] = None
    ) -> int:
        stmt = select(func.count(Product.id)).where(Product.seller_id == seller_id)
        if status is not None:
            stmt = stmt.where(Product.status == status)
        return (await db.execute(stmt)).scalar_one()

    async def count_by_status(self, db: AsyncSession) -> Dict[str, int]:
        """Listing totals keyed by status value; every status is present."""
        result = await db.execute(
            select(Product.status, func.count(Product.id)).group_by(Product.status)
        )
        counts = {status.value: 0 for status in ProductStatus}
        for status, count in result.all():
            counts[ProductStatus(status).value] = count
        return counts


category_crud = CRUDCategory(Category)
product_crud = CRUDProduct(Product, resource_name="product")
