"""Shopping settings.

Defaults that account creation and checkout depend on (the sentinel address,
the opening wallet balance, the payment option) are held in one immutable
structure. It is read from the environment once and handed explicitly to the
domain methods that need it.

Provides get_settings() / set_settings() / reset_settings() so tests can swap
in their own values.
"""

import os
from dataclasses import dataclass

DEFAULT_ADDRESS = "ADDRESS_NOT_SET"
DEFAULT_WALLET_MONEY = 500.0
DEFAULT_PAYMENT_OPTION = "PAYMENT_OPTION_DEFAULT"
DEFAULT_LOCK_TIMEOUT_SECONDS = 5.0


@dataclass(frozen=True)
class ShoppingSettings:
    """Immutable defaults for the shopping domain."""

    default_address: str = DEFAULT_ADDRESS
    default_wallet_money: float = DEFAULT_WALLET_MONEY
    default_payment_option: str = DEFAULT_PAYMENT_OPTION
    lock_timeout_seconds: float = DEFAULT_LOCK_TIMEOUT_SECONDS

    @classmethod
    def from_env(cls) -> "ShoppingSettings":
        return cls(
            default_address=os.environ.get("KARTFLOW_DEFAULT_ADDRESS", DEFAULT_ADDRESS),
            default_wallet_money=float(os.environ.get("KARTFLOW_DEFAULT_WALLET_MONEY", DEFAULT_WALLET_MONEY)),
            default_payment_option=os.environ.get("KARTFLOW_DEFAULT_PAYMENT_OPTION", DEFAULT_PAYMENT_OPTION),
            lock_timeout_seconds=float(
                os.environ.get("KARTFLOW_LOCK_TIMEOUT_SECONDS", DEFAULT_LOCK_TIMEOUT_SECONDS)
            ),
        )


_current_settings: ShoppingSettings | None = None


def get_settings() -> ShoppingSettings:
    """Return the active settings, loading them from the environment on first use."""
    global _current_settings
    if _current_settings is None:
        _current_settings = ShoppingSettings.from_env()
    return _current_settings


def set_settings(settings: ShoppingSettings) -> None:
    """Override the active settings (useful for tests)."""
    global _current_settings
    _current_settings = settings


def reset_settings() -> None:
    """Drop the active settings so the next access reloads them from the environment."""
    global _current_settings
    _current_settings = None
