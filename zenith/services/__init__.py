"""Services module."""

from zenith.services.cache_service import CacheService, cache
from zenith.services.listing_service import ListingService
from zenith.services.tutor_service import TutorService
from zenith.services.verification_service import VerificationService
from zenith.services.checkout_service import CheckoutService
from zenith.services.user_admin_service import UserAdminService

__all__ = [
    "CacheService",
    "cache",
    "ListingService",
    "TutorService",
    "VerificationService",
    "CheckoutService",
    "UserAdminService",
]
