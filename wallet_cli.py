"""Mini README: Command line wrapper around the wallet service.

Each command loads the ledger from the dump directory, performs a single
operation, writes the dumps back and prints the outcome. The directory
defaults to ``WALLET_DATA_DIRECTORY`` (``./data``) and can be overridden per
call with ``--data-dir``.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Callable, Optional, TypeVar

import typer

from walletledger.configuration import get_settings
from walletledger.logging_utils import configure_root_logger, get_logger
from walletledger.wallet import Service, WalletError, load_service

LOGGER = get_logger(__name__)

cli = typer.Typer(help="Manage wallet accounts, payments and favorites.")

T = TypeVar("T")


def _data_dir_option():
    return typer.Option(None, "--data-dir", help="Directory holding the *.dump files.")


def _data_dir(data_dir: Optional[Path]) -> Path:
    return data_dir or get_settings().data_directory


def _run(data_dir: Optional[Path], operation: Callable[[Service], T], *, save: bool = True) -> T:
    """Load the ledger, apply ``operation`` and persist the result."""

    settings = get_settings()
    configure_root_logger(settings.log_level)
    directory = _data_dir(data_dir)
    try:
        service = load_service(directory)
        result = operation(service)
        if save:
            service.export_to_directory(directory)
    except (WalletError, OSError, ValueError) as error:
        LOGGER.debug("Operation failed: %r", error)
        typer.echo(f"Error: {error}", err=True)
        raise typer.Exit(code=1) from error
    return result


@cli.command()
def register(phone: str, data_dir: Optional[Path] = _data_dir_option()) -> None:
    """Register a new account for PHONE."""

    account = _run(data_dir, lambda service: service.register_account(phone))
    typer.echo(f"Registered account {account.id} for {account.phone}")


@cli.command()
def deposit(account_id: int, amount: int, data_dir: Optional[Path] = _data_dir_option()) -> None:
    """Credit AMOUNT (minor units) to ACCOUNT_ID."""

    def operation(service: Service) -> int:
        service.deposit(account_id, amount)
        return service.find_account_by_id(account_id).balance

    balance = _run(data_dir, operation)
    typer.echo(f"Account {account_id} balance: {balance}")


@cli.command()
def pay(account_id: int, amount: int, category: str, data_dir: Optional[Path] = _data_dir_option()) -> None:
    """Pay AMOUNT from ACCOUNT_ID in CATEGORY."""

    payment = _run(data_dir, lambda service: service.pay(account_id, amount, category))
    typer.echo(f"Payment {payment.id}: {payment.amount} ({payment.category}) {payment.status.value}")


@cli.command()
def reject(payment_id: str, data_dir: Optional[Path] = _data_dir_option()) -> None:
    """Reject PAYMENT_ID and refund the account."""

    def operation(service: Service) -> None:
        service.reject(payment_id)

    _run(data_dir, operation)
    typer.echo(f"Rejected payment {payment_id}")


@cli.command()
def repeat(payment_id: str, data_dir: Optional[Path] = _data_dir_option()) -> None:
    """Pay again with the details of PAYMENT_ID."""

    payment = _run(data_dir, lambda service: service.repeat(payment_id))
    typer.echo(f"Payment {payment.id}: {payment.amount} ({payment.category}) {payment.status.value}")


@cli.command()
def favorite(payment_id: str, name: str, data_dir: Optional[Path] = _data_dir_option()) -> None:
    """Save PAYMENT_ID as a favorite called NAME."""

    saved = _run(data_dir, lambda service: service.favorite_payment(payment_id, name))
    typer.echo(f"Favorite {saved.id}: {saved.name}")


@cli.command("pay-favorite")
def pay_favorite(favorite_id: str, data_dir: Optional[Path] = _data_dir_option()) -> None:
    """Make a payment from FAVORITE_ID."""

    payment = _run(data_dir, lambda service: service.pay_from_favorite(favorite_id))
    typer.echo(f"Payment {payment.id}: {payment.amount} ({payment.category}) {payment.status.value}")


@cli.command()
def show(account_id: int, data_dir: Optional[Path] = _data_dir_option()) -> None:
    """Print ACCOUNT_ID with its payments and favorites as JSON."""

    def operation(service: Service) -> dict:
        account = service.find_account_by_id(account_id)
        return {
            "account": account.as_dict(),
            "payments": [p.as_dict() for p in service.list_payments() if p.account_id == account_id],
            "favorites": [f.as_dict() for f in service.list_favorites() if f.account_id == account_id],
        }

    typer.echo(json.dumps(_run(data_dir, operation, save=False), indent=2))


@cli.command()
def summary(data_dir: Optional[Path] = _data_dir_option()) -> None:
    """Print ledger totals as JSON."""

    def operation(service: Service) -> dict:
        return {
            "accounts": len(service.list_accounts()),
            "payments": len(service.list_payments()),
            "favorites": len(service.list_favorites()),
            "total_balance": sum(account.balance for account in service.list_accounts()),
            "total_paid": service.sum_payments(),
        }

    typer.echo(json.dumps(_run(data_dir, operation, save=False), indent=2))


@cli.command("export-legacy")
def export_legacy(
    path: Optional[Path] = typer.Argument(None, help="Target file, defaults to the configured name."),
    data_dir: Optional[Path] = _data_dir_option(),
) -> None:
    """Write all accounts to a single |-terminated file."""

    directory = _data_dir(data_dir)
    target = path or directory / get_settings().legacy_export_filename

    def operation(service: Service) -> None:
        target.parent.mkdir(parents=True, exist_ok=True)
        service.export_to_file(target)

    _run(data_dir, operation, save=False)
    typer.echo(f"Exported accounts to {target}")


@cli.command("import-legacy")
def import_legacy(path: Path, data_dir: Optional[Path] = _data_dir_option()) -> None:
    """Append the accounts stored in a single-file export."""

    def operation(service: Service) -> int:
        service.import_from_file(path)
        return len(service.list_accounts())

    count = _run(data_dir, operation)
    typer.echo(f"Ledger now holds {count} accounts")


if __name__ == "__main__":
    cli()
