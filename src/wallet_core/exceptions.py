"""Exception hierarchy for the wallet monitor core."""

from typing import Any, Dict, Optional


class WalletMonError(Exception):
    """Base exception for all wallet monitor errors."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ConfigurationError(WalletMonError):
    """Raised when the configuration file is invalid or cannot be read."""


class JournalLoadError(WalletMonError):
    """Raised when a wallet journal file exists but cannot be parsed."""


class InvalidInputError(WalletMonError):
    """Raised when a tile field holds text that is not a number."""
