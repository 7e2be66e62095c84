"""User aggregate as seen by the shopping domain.

Accounts are owned by the account subsystem (signup, login and credentials
live there). Shopping needs three things from a user: the email that keys
their cart, the wallet that checkout debits, and whether a real delivery
address has been set.
"""

from datetime import UTC, datetime
from decimal import Decimal

from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import DateTime, Float, String

from shopping.account.events import AddressUpdated, WalletDebited
from shopping.config import ShoppingSettings, get_settings
from shopping.domain import shopping
from shopping.shared.money import to_amount, to_decimal
from shopping.shared.persistence import storage_errors


@shopping.aggregate
class User:
    email = String(required=True, max_length=255, unique=True)
    name = String(max_length=100)
    wallet_money = Float(required=True, min_value=0.0)
    address = String(max_length=500)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def register(cls, email, name, settings: ShoppingSettings | None = None):
        """Build a user with the configured opening balance and the "no address" sentinel."""
        settings = settings or get_settings()
        now = datetime.now(UTC)
        return cls(
            email=email,
            name=name,
            wallet_money=settings.default_wallet_money,
            address=settings.default_address,
            created_at=now,
            updated_at=now,
        )

    def has_set_non_default_address(self, settings: ShoppingSettings) -> bool:
        """False for the configured sentinel and also for a blank or missing address."""
        return bool(self.address) and self.address != settings.default_address

    def update_address(self, address):
        if not address or not address.strip():
            raise ValidationError({"address": ["Address cannot be blank"]})

        self.address = address.strip()
        self.updated_at = datetime.now(UTC)

        self.raise_(AddressUpdated(user_id=str(self.id), email=self.email))

    def can_afford(self, amount: Decimal) -> bool:
        return amount <= to_decimal(self.wallet_money)

    def debit_wallet(self, amount: Decimal):
        """Take ``amount`` from the wallet. The balance never goes negative."""
        amount = to_decimal(amount)
        if amount < 0:
            raise ValidationError({"amount": ["Debit amount cannot be negative"]})
        if not self.can_afford(amount):
            raise ValidationError({"wallet_money": ["Insufficient wallet balance"]})

        self.wallet_money = to_amount(to_decimal(self.wallet_money) - amount)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            WalletDebited(
                user_id=str(self.id),
                email=self.email,
                amount=to_amount(amount),
                balance=self.wallet_money,
            )
        )


@shopping.repository(part_of=User)
class UserRepository:
    def find_by_email(self, email: str) -> User | None:
        with storage_errors("find user by email"):
            users = self._dao.query.filter(email=email).all().items
        return users[0] if users else None

    def get_by_email(self, email: str) -> User:
        user = self.find_by_email(email)
        if user is None:
            raise ObjectNotFoundError(f"User with email {email} does not exist")
        return user

    def is_email_taken(self, email: str) -> bool:
        return self.find_by_email(email) is not None
