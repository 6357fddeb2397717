"""Mini README: Error taxonomy raised by the wallet service.

Lookups that miss raise ``KeyError`` subclasses and rejected inputs raise
``ValueError`` subclasses, so callers can catch either the precise wallet
error or the builtin family. All of them share ``WalletError`` for the CLI.
"""

from __future__ import annotations

from typing import Optional, Union


class WalletError(Exception):
    """Base class for every failure reported by ``Service``."""

    message = "wallet error"

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or self.message)

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message.
        return str(self.args[0])


class PhoneAlreadyRegistered(WalletError, ValueError):
    message = "phone already registered"

    def __init__(self, phone: str) -> None:
        super().__init__()
        self.phone = phone


class AmountMustBePositive(WalletError, ValueError):
    message = "amount must be greater than zero"

    def __init__(self, amount: int) -> None:
        super().__init__()
        self.amount = amount


class NotEnoughBalance(WalletError, ValueError):
    message = "not enough balance"

    def __init__(self, account_id: int, balance: int, amount: int) -> None:
        super().__init__()
        self.account_id = account_id
        self.balance = balance
        self.amount = amount


class _NotFound(WalletError, KeyError):
    def __init__(self, identifier: Union[int, str]) -> None:
        super().__init__()
        self.identifier = identifier


class AccountNotFound(_NotFound):
    message = "account not found"


class PaymentNotFound(_NotFound):
    message = "payment not found"


class FavoriteNotFound(_NotFound):
    message = "favorite not found"
