"""Mini README: Package initialiser for the wallet ledger.

The ledger keeps accounts, payments and favorites in memory and persists
them to plain ``;``-delimited text dumps. ``walletledger.wallet`` holds the
service and its data types; this module only re-exports the logging helper
so callers can share the same formatting.
"""

from .logging_utils import get_logger

__all__ = ["get_logger"]
