"""Mini README: Wallet service package.

Groups the ``Service`` component with the data types it mutates, the
error taxonomy it raises and the text codec used by its dump files.
"""

from .errors import (
    AccountNotFound,
    AmountMustBePositive,
    FavoriteNotFound,
    NotEnoughBalance,
    PaymentNotFound,
    PhoneAlreadyRegistered,
    WalletError,
)
from .service import Service, load_service
from .types import Account, Favorite, Money, Payment, PaymentCategory, PaymentStatus, Phone, Progress

__all__ = [
    "Account",
    "AccountNotFound",
    "AmountMustBePositive",
    "Favorite",
    "FavoriteNotFound",
    "Money",
    "NotEnoughBalance",
    "Payment",
    "PaymentCategory",
    "PaymentNotFound",
    "PaymentStatus",
    "Phone",
    "PhoneAlreadyRegistered",
    "Progress",
    "Service",
    "WalletError",
    "load_service",
]
