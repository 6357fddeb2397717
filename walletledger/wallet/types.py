"""Mini README: Plain data types manipulated by the wallet service.

Structure:
    * Money, Phone, PaymentCategory - aliases documenting intent.
    * PaymentStatus - enum of the literal statuses written to dumps.
    * Account, Payment, Favorite - mutable records owned by ``Service``.
    * Progress - partial sum emitted while totalling payments in chunks.

Amounts are integers in minor currency units (cents, kopecks, dirhams), so
all arithmetic stays exact.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict

Money = int
Phone = str
PaymentCategory = str


class PaymentStatus(str, Enum):
    """Lifecycle of a payment; values are the on-disk literals."""

    OK = "OK"
    FAIL = "FAIL"
    IN_PROGRESS = "INPROGRESS"

    @classmethod
    def from_str(cls, value: str) -> "PaymentStatus":
        """Coerce arbitrary casing into a valid payment status."""

        try:
            normalised = value.strip().upper()
            return cls(normalised)
        except (ValueError, AttributeError) as error:
            raise ValueError(f"Unsupported payment status: {value}") from error


@dataclass(slots=True)
class Account:
    """User account identified by a sequential ID and a phone number."""

    id: int
    phone: Phone
    balance: Money = 0

    def as_dict(self) -> Dict[str, object]:
        return {"id": self.id, "phone": self.phone, "balance": self.balance}


@dataclass(slots=True)
class Payment:
    """Debit recorded against an account."""

    id: str
    account_id: int
    amount: Money
    category: PaymentCategory
    status: PaymentStatus = PaymentStatus.IN_PROGRESS

    def as_dict(self) -> Dict[str, object]:
        return {
            "id": self.id,
            "account_id": self.account_id,
            "amount": self.amount,
            "category": self.category,
            "status": self.status.value,
        }


@dataclass(slots=True)
class Favorite:
    """Named snapshot of a payment that can be replayed later."""

    id: str
    account_id: int
    name: str
    amount: Money
    category: PaymentCategory

    def as_dict(self) -> Dict[str, object]:
        return {
            "id": self.id,
            "account_id": self.account_id,
            "name": self.name,
            "amount": self.amount,
            "category": self.category,
        }


@dataclass(slots=True)
class Progress:
    """Sum of one chunk of payments."""

    part: int
    result: Money
