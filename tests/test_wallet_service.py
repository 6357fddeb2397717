"""Mini README: Tests covering the in-memory wallet operations.

Structure:
    * account tests - registration order, phone uniqueness, deposits.
    * payment tests - debits, overdrafts, rejection and repetition.
    * favorite tests - snapshots and paying from a favorite.
    * progress tests - chunked payment totals.
"""

from __future__ import annotations

import pytest

from walletledger.wallet import (
    AccountNotFound,
    AmountMustBePositive,
    FavoriteNotFound,
    NotEnoughBalance,
    Payment,
    PaymentNotFound,
    PaymentStatus,
    PhoneAlreadyRegistered,
    Progress,
    Service,
    WalletError,
)


def _funded_service(balance: int = 10_000, phone: str = "992000000001") -> tuple[Service, int]:
    service = Service()
    account = service.register_account(phone)
    service.deposit(account.id, balance)
    return service, account.id


def test_register_account_assigns_sequential_ids() -> None:
    """Account IDs start at 1 and grow by one per registration."""

    service = Service()
    first = service.register_account("79000000001")
    second = service.register_account("79000000002")

    assert (first.id, second.id) == (1, 2)
    assert first.balance == 0
    assert [account.phone for account in service.list_accounts()] == ["79000000001", "79000000002"]


def test_register_account_rejects_duplicate_phone() -> None:
    """A phone can only be registered once."""

    service = Service()
    service.register_account("79000000001")

    with pytest.raises(PhoneAlreadyRegistered) as excinfo:
        service.register_account("79000000001")

    assert str(excinfo.value) == "phone already registered"
    assert isinstance(excinfo.value, ValueError)
    assert len(service.list_accounts()) == 1
    assert service.next_account_id == 1


@pytest.mark.parametrize("amount", [0, -100])
def test_deposit_rejects_non_positive_amount(amount: int) -> None:
    """Non-positive deposits fail and leave the balance untouched."""

    service, account_id = _funded_service(balance=500)

    with pytest.raises(AmountMustBePositive):
        service.deposit(account_id, amount)

    assert service.find_account_by_id(account_id).balance == 500


def test_deposit_to_unknown_account_fails() -> None:
    """Deposits must target an existing account."""

    service = Service()

    with pytest.raises(AccountNotFound) as excinfo:
        service.deposit(42, 100)

    assert isinstance(excinfo.value, KeyError)
    assert excinfo.value.identifier == 42
    assert str(excinfo.value) == "account not found"


def test_find_account_by_id() -> None:
    service, account_id = _funded_service()

    assert service.find_account_by_id(account_id).phone == "992000000001"
    with pytest.raises(AccountNotFound):
        service.find_account_by_id(account_id + 1)


def test_pay_debits_exact_amount() -> None:
    """Payments debit the account and start in progress."""

    service, account_id = _funded_service(balance=10_000)

    payment = service.pay(account_id, 2_500, "auto")

    assert service.find_account_by_id(account_id).balance == 7_500
    assert payment.status is PaymentStatus.IN_PROGRESS
    assert (payment.account_id, payment.amount, payment.category) == (account_id, 2_500, "auto")
    assert service.find_payment_by_id(payment.id) is payment


def test_pay_whole_balance_is_allowed() -> None:
    service, account_id = _funded_service(balance=300)

    service.pay(account_id, 300, "rent")

    assert service.find_account_by_id(account_id).balance == 0


def test_pay_more_than_balance_changes_nothing() -> None:
    """Overdrafts fail without touching the balance or payment list."""

    service, account_id = _funded_service(balance=1_000)

    with pytest.raises(NotEnoughBalance) as excinfo:
        service.pay(account_id, 1_001, "auto")

    assert excinfo.value.balance == 1_000
    assert service.find_account_by_id(account_id).balance == 1_000
    assert service.list_payments() == []


def test_pay_validates_amount_before_account() -> None:
    service = Service()

    with pytest.raises(AmountMustBePositive):
        service.pay(99, 0, "auto")
    with pytest.raises(AccountNotFound):
        service.pay(99, 10, "auto")


def test_find_payment_by_id_unknown() -> None:
    service, _ = _funded_service()

    with pytest.raises(PaymentNotFound):
        service.find_payment_by_id("missing")


def test_reject_refunds_and_marks_failed() -> None:
    """Rejecting restores the exact amount and flags the payment as failed."""

    service, account_id = _funded_service(balance=5_000)
    payment = service.pay(account_id, 1_200, "pharmacy")

    service.reject(payment.id)

    assert payment.status is PaymentStatus.FAIL
    assert service.find_account_by_id(account_id).balance == 5_000


def test_reject_twice_credits_twice() -> None:
    """There is no guard against rejecting an already failed payment."""

    service, account_id = _funded_service(balance=5_000)
    payment = service.pay(account_id, 1_000, "food")

    service.reject(payment.id)
    service.reject(payment.id)

    assert service.find_account_by_id(account_id).balance == 6_000


def test_reject_unknown_payment() -> None:
    service = Service()

    with pytest.raises(PaymentNotFound):
        service.reject("missing")


def test_reject_with_missing_account_reports_account_not_found() -> None:
    """A payment whose account is gone fails distinctly and stays untouched."""

    service = Service()
    orphan = Payment(id="orphan", account_id=7, amount=100, category="food")
    service._payments[orphan.id] = orphan

    with pytest.raises(AccountNotFound) as excinfo:
        service.reject(orphan.id)

    assert excinfo.value.identifier == 7
    assert orphan.status is PaymentStatus.IN_PROGRESS


def test_repeat_creates_new_payment_with_same_details() -> None:
    """Repeating copies account, amount and category under a fresh ID."""

    service, account_id = _funded_service(balance=10_000)
    original = service.pay(account_id, 3_000, "auto")

    repeated = service.repeat(original.id)

    assert repeated.id != original.id
    assert (repeated.account_id, repeated.amount, repeated.category) == (
        original.account_id,
        original.amount,
        original.category,
    )
    assert repeated.status is PaymentStatus.IN_PROGRESS
    assert service.find_account_by_id(account_id).balance == 4_000
    assert len(service.list_payments()) == 2


def test_repeat_revalidates_balance() -> None:
    """Repeating fails when the balance no longer covers the amount."""

    service, account_id = _funded_service(balance=5_000)
    original = service.pay(account_id, 3_000, "auto")

    with pytest.raises(NotEnoughBalance):
        service.repeat(original.id)

    assert service.find_account_by_id(account_id).balance == 2_000
    assert len(service.list_payments()) == 1


def test_repeat_unknown_payment() -> None:
    service = Service()

    with pytest.raises(PaymentNotFound):
        service.repeat("missing")


def test_favorite_payment_snapshots_payment() -> None:
    """Favorites copy the payment's account, amount and category."""

    service, account_id = _funded_service()
    payment = service.pay(account_id, 750, "mobile")

    favorite = service.favorite_payment(payment.id, "Phone bill")

    assert favorite.id != payment.id
    assert (favorite.account_id, favorite.name, favorite.amount, favorite.category) == (
        account_id,
        "Phone bill",
        750,
        "mobile",
    )
    assert service.find_favorite_by_id(favorite.id) is favorite

    with pytest.raises(PaymentNotFound):
        service.favorite_payment("missing", "Nope")


def test_find_favorite_by_id_unknown() -> None:
    service = Service()

    with pytest.raises(FavoriteNotFound):
        service.find_favorite_by_id("missing")


def test_pay_from_favorite_debits_like_pay() -> None:
    """Paying from a favorite validates and debits the balance."""

    service, account_id = _funded_service(balance=2_000)
    favorite = service.favorite_payment(service.pay(account_id, 800, "mobile").id, "Phone bill")

    payment = service.pay_from_favorite(favorite.id)

    assert payment.status is PaymentStatus.IN_PROGRESS
    assert (payment.account_id, payment.amount, payment.category) == (account_id, 800, "mobile")
    assert service.find_account_by_id(account_id).balance == 400

    with pytest.raises(NotEnoughBalance):
        service.pay_from_favorite(favorite.id)
    with pytest.raises(FavoriteNotFound):
        service.pay_from_favorite("missing")


def test_sum_payments_with_progress_chunks_in_order() -> None:
    service, account_id = _funded_service(balance=1_000)
    for amount in (10, 20, 30, 40, 50):
        service.pay(account_id, amount, "misc")

    progress = list(service.sum_payments_with_progress(part_size=2))

    assert progress == [Progress(part=0, result=30), Progress(part=1, result=70), Progress(part=2, result=50)]
    assert service.sum_payments() == 150
    assert list(Service().sum_payments_with_progress()) == []
    with pytest.raises(ValueError):
        list(service.sum_payments_with_progress(part_size=0))


def test_end_to_end_pay_and_reject() -> None:
    """Register, deposit, pay for food, then reject the payment."""

    service = Service()
    account = service.register_account("79000000001")
    service.deposit(account.id, 10_000)

    payment = service.pay(account.id, 2_000, "food")

    assert account.balance == 8_000
    assert [(p.amount, p.status) for p in service.list_payments()] == [(2_000, PaymentStatus.IN_PROGRESS)]

    service.reject(payment.id)

    assert account.balance == 10_000
    assert payment.status is PaymentStatus.FAIL


def test_all_wallet_errors_share_base_class() -> None:
    service = Service()

    with pytest.raises(WalletError):
        service.find_payment_by_id("missing")
