"""Mini README: In-memory wallet service with flat-file persistence.

Structure:
    * Service - owns accounts, payments and favorites plus the account ID
      counter, and exposes every wallet operation.

Collections keep insertion order for listing and export while lookups go
through dictionaries keyed by ID. The service is not thread-safe; callers
that share an instance must serialise access themselves.

Two persistence formats coexist:
    * ``export_to_file``/``import_from_file`` - accounts only, in a single
      file with ``|``-terminated records.
    * ``export_to_directory``/``import_from_directory`` - accounts, payments
      and favorites in ``accounts.dump``, ``payments.dump`` and
      ``favorites.dump``, one record per line.
"""

from __future__ import annotations

import uuid
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Union

from ..logging_utils import get_logger
from . import dump_format
from .errors import (
    AccountNotFound,
    AmountMustBePositive,
    FavoriteNotFound,
    NotEnoughBalance,
    PaymentNotFound,
    PhoneAlreadyRegistered,
)
from .types import (
    Account,
    Favorite,
    Money,
    Payment,
    PaymentCategory,
    PaymentStatus,
    Phone,
    Progress,
)

LOGGER = get_logger(__name__)

PathLike = Union[str, Path]

ACCOUNTS_DUMP = "accounts.dump"
PAYMENTS_DUMP = "payments.dump"
FAVORITES_DUMP = "favorites.dump"

_ACCOUNT_FIELDS = ("ID", "Phone", "Balance")
_PAYMENT_FIELDS = ("ID", "AccountID", "Amount", "Category", "Status")
_FAVORITE_FIELDS = ("ID", "AccountID", "Name", "Amount", "Category")


def _new_id() -> str:
    return str(uuid.uuid4())


class Service:
    """Manage wallet accounts, payments and favorites."""

    def __init__(self) -> None:
        self.next_account_id = 0
        # The legacy import may append an account whose ID already exists, so
        # accounts keep a list alongside the index; the index holds the first.
        self._accounts: List[Account] = []
        self._accounts_by_id: Dict[int, Account] = {}
        self._payments: Dict[str, Payment] = {}
        self._favorites: Dict[str, Favorite] = {}

    # Accounts

    def register_account(self, phone: Phone) -> Account:
        """Create a zero-balance account with the next sequential ID."""

        if any(account.phone == phone for account in self._accounts):
            raise PhoneAlreadyRegistered(phone)

        self.next_account_id += 1
        account = Account(id=self.next_account_id, phone=phone, balance=0)
        self._append_account(account)
        LOGGER.info("Registered account %s for phone %s", account.id, phone)
        return account

    def deposit(self, account_id: int, amount: Money) -> None:
        """Credit ``amount`` to the account."""

        if amount <= 0:
            raise AmountMustBePositive(amount)

        account = self.find_account_by_id(account_id)
        account.balance += amount
        LOGGER.info("Deposited %s to account %s", amount, account_id)

    def find_account_by_id(self, account_id: int) -> Account:
        account = self._accounts_by_id.get(account_id)
        if account is None:
            raise AccountNotFound(account_id)
        return account

    def list_accounts(self) -> List[Account]:
        return list(self._accounts)

    def _append_account(self, account: Account) -> None:
        self._accounts.append(account)
        self._accounts_by_id.setdefault(account.id, account)

    # Payments

    def pay(self, account_id: int, amount: Money, category: PaymentCategory) -> Payment:
        """Debit the account and record an in-progress payment."""

        if amount <= 0:
            raise AmountMustBePositive(amount)

        account = self.find_account_by_id(account_id)
        if account.balance < amount:
            raise NotEnoughBalance(account_id, account.balance, amount)

        account.balance -= amount
        payment = Payment(
            id=_new_id(),
            account_id=account_id,
            amount=amount,
            category=category,
            status=PaymentStatus.IN_PROGRESS,
        )
        self._payments[payment.id] = payment
        LOGGER.info("Payment %s of %s from account %s (%s)", payment.id, amount, account_id, category)
        return payment

    def find_payment_by_id(self, payment_id: str) -> Payment:
        payment = self._payments.get(payment_id)
        if payment is None:
            raise PaymentNotFound(payment_id)
        return payment

    def list_payments(self) -> List[Payment]:
        return list(self._payments.values())

    def reject(self, payment_id: str) -> None:
        """Mark the payment as failed and return its amount to the account.

        Rejecting an already failed payment credits the account again.
        """

        payment = self.find_payment_by_id(payment_id)
        account = self.find_account_by_id(payment.account_id)

        payment.status = PaymentStatus.FAIL
        account.balance += payment.amount
        LOGGER.info("Rejected payment %s, refunded %s to account %s", payment_id, payment.amount, account.id)

    def repeat(self, payment_id: str) -> Payment:
        """Pay again with the account, amount and category of an earlier payment."""

        payment = self.find_payment_by_id(payment_id)
        repeated = self.pay(payment.account_id, payment.amount, payment.category)
        LOGGER.debug("Payment %s repeated as %s", payment_id, repeated.id)
        return repeated

    def sum_payments(self) -> Money:
        return sum(payment.amount for payment in self._payments.values())

    def sum_payments_with_progress(self, part_size: int = 100_000) -> Iterator[Progress]:
        """Yield the total of each consecutive chunk of ``part_size`` payments."""

        if part_size <= 0:
            raise ValueError("part_size must be greater than zero")

        payments = self.list_payments()
        for part, start in enumerate(range(0, len(payments), part_size)):
            chunk = payments[start : start + part_size]
            yield Progress(part=part, result=sum(payment.amount for payment in chunk))

    # Favorites

    def favorite_payment(self, payment_id: str, name: str) -> Favorite:
        """Bookmark a payment under ``name``."""

        payment = self.find_payment_by_id(payment_id)
        favorite = Favorite(
            id=_new_id(),
            account_id=payment.account_id,
            name=name,
            amount=payment.amount,
            category=payment.category,
        )
        self._favorites[favorite.id] = favorite
        LOGGER.info("Payment %s saved as favorite %s (%s)", payment_id, favorite.id, name)
        return favorite

    def find_favorite_by_id(self, favorite_id: str) -> Favorite:
        favorite = self._favorites.get(favorite_id)
        if favorite is None:
            raise FavoriteNotFound(favorite_id)
        return favorite

    def list_favorites(self) -> List[Favorite]:
        return list(self._favorites.values())

    def pay_from_favorite(self, favorite_id: str) -> Payment:
        """Make a new payment from a favorite, validated and debited like ``pay``."""

        favorite = self.find_favorite_by_id(favorite_id)
        return self.pay(favorite.account_id, favorite.amount, favorite.category)

    # Single-file account export

    def export_to_file(self, path: PathLike) -> None:
        """Write every account as ``ID;Phone;Balance|``."""

        path = Path(path)
        with path.open("w", encoding="utf-8", newline="") as dump:
            for account in self._accounts:
                dump.write(
                    dump_format.encode_record(
                        (account.id, account.phone, account.balance),
                        dump_format.LEGACY_TERMINATOR,
                    )
                )
        LOGGER.info("Exported %s accounts to %s", len(self._accounts), path)

    def import_from_file(self, path: PathLike) -> None:
        """Append every account found in a single-file export.

        Records are not de-duplicated: importing the same file twice lists
        each account twice, while lookups keep resolving to the first one.
        """

        path = Path(path)
        with path.open("r", encoding="utf-8", newline="") as dump:
            text = dump.read()

        records, remainder = dump_format.split_records(text, dump_format.LEGACY_TERMINATOR)
        if remainder:
            LOGGER.warning("Ignoring unterminated trailing record in %s: %r", path, remainder)

        for record in records:
            account = self._parse_account(record)
            self._append_account(account)
            self.next_account_id = max(self.next_account_id, account.id)
        LOGGER.info("Imported %s accounts from %s", len(records), path)

    # Directory dumps

    def export_to_directory(self, directory: PathLike) -> None:
        """Dump every non-empty collection into ``directory``.

        A failure part-way leaves the files already written in place.
        """

        directory = Path(directory)
        directory.mkdir(parents=True, exist_ok=True)

        if self._accounts:
            self._write_lines(
                directory / ACCOUNTS_DUMP,
                ((account.id, account.phone, account.balance) for account in self._accounts),
            )
        if self._payments:
            self._write_lines(
                directory / PAYMENTS_DUMP,
                (
                    (payment.id, payment.account_id, payment.amount, payment.category, payment.status.value)
                    for payment in self._payments.values()
                ),
            )
        if self._favorites:
            self._write_lines(
                directory / FAVORITES_DUMP,
                (
                    (favorite.id, favorite.account_id, favorite.name, favorite.amount, favorite.category)
                    for favorite in self._favorites.values()
                ),
            )
        LOGGER.info(
            "Exported %s accounts, %s payments, %s favorites to %s",
            len(self._accounts),
            len(self._payments),
            len(self._favorites),
            directory,
        )

    def import_from_directory(self, directory: PathLike) -> None:
        """Load dumps from ``directory``, skipping records whose ID is already known.

        Missing dump files are treated as empty. Other errors opening a dump
        are logged and that file is skipped; malformed records raise
        ``ValueError``.
        """

        directory = Path(directory)

        for record in self._read_lines(directory / ACCOUNTS_DUMP):
            account = self._parse_account(record)
            try:
                self.find_account_by_id(account.id)
            except AccountNotFound:
                self._append_account(account)
            self.next_account_id = max(self.next_account_id, account.id)

        for record in self._read_lines(directory / PAYMENTS_DUMP):
            payment = self._parse_payment(record)
            try:
                self.find_payment_by_id(payment.id)
            except PaymentNotFound:
                self._payments[payment.id] = payment

        for record in self._read_lines(directory / FAVORITES_DUMP):
            favorite = self._parse_favorite(record)
            try:
                self.find_favorite_by_id(favorite.id)
            except FavoriteNotFound:
                self._favorites[favorite.id] = favorite

        LOGGER.info(
            "Import from %s complete: %s accounts, %s payments, %s favorites in memory",
            directory,
            len(self._accounts),
            len(self._payments),
            len(self._favorites),
        )

    @staticmethod
    def _write_lines(path: Path, rows: Iterable[tuple]) -> None:
        with path.open("w", encoding="utf-8", newline="") as dump:
            for row in rows:
                dump.write(dump_format.encode_record(row, dump_format.LINE_TERMINATOR))
        LOGGER.debug("Wrote %s", path)

    @staticmethod
    def _read_lines(path: Path) -> List[str]:
        try:
            with path.open("r", encoding="utf-8", newline="") as dump:
                text = dump.read()
        except FileNotFoundError:
            LOGGER.debug("No dump at %s, nothing to import", path)
            return []
        except OSError as error:
            LOGGER.warning("Skipping dump %s: %s", path, error)
            return []

        records, remainder = dump_format.split_records(text, dump_format.LINE_TERMINATOR)
        if remainder:
            records.append(remainder)
        # Values escape their own carriage returns, so a raw one is a CRLF ending.
        return [record[:-1] if record.endswith("\r") else record for record in records]

    @staticmethod
    def _parse_account(record: str) -> Account:
        identifier, phone, balance = dump_format.expect_fields(record, _ACCOUNT_FIELDS)
        return Account(
            id=dump_format.parse_int(identifier, "ID"),
            phone=phone,
            balance=dump_format.parse_int(balance, "Balance"),
        )

    @staticmethod
    def _parse_payment(record: str) -> Payment:
        identifier, account_id, amount, category, status = dump_format.expect_fields(
            record, _PAYMENT_FIELDS
        )
        return Payment(
            id=identifier,
            account_id=dump_format.parse_int(account_id, "AccountID"),
            amount=dump_format.parse_int(amount, "Amount"),
            category=category,
            status=PaymentStatus.from_str(status),
        )

    @staticmethod
    def _parse_favorite(record: str) -> Favorite:
        identifier, account_id, name, amount, category = dump_format.expect_fields(
            record, _FAVORITE_FIELDS
        )
        return Favorite(
            id=identifier,
            account_id=dump_format.parse_int(account_id, "AccountID"),
            name=name,
            amount=dump_format.parse_int(amount, "Amount"),
            category=category,
        )


def load_service(directory: Optional[PathLike] = None) -> Service:
    """Build a service, importing dumps from ``directory`` when given."""

    service = Service()
    if directory is not None:
        service.import_from_directory(directory)
    return service
