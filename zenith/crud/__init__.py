"""CRUD operations for database models."""

from zenith.crud.base import CRUDBase
from zenith.crud.user import user_crud
from zenith.crud.product import category_crud, product_crud
from zenith.crud.tutor import tutor_application_crud
from zenith.crud.support import support_crud
from zenith.crud.notification import notification_crud
from zenith.crud.message import message_crud
from zenith.crud.order import wishlist_crud, order_crud
from zenith.crud.audit import audit_crud

__all__ = [
    "CRUDBase",
    "user_crud",
    "category_crud",
    "product_crud",
    "tutor_application_crud",
    "support_crud",
    "notification_crud",
    "message_crud",
    "wishlist_crud",
    "order_crud",
    "audit_crud",
]
