"""Domain events for the User aggregate."""

from protean.fields import Float, Identifier, String

from shopping.domain import shopping


@shopping.event(part_of="User")
class WalletDebited:
    """Money was taken from a user's wallet to pay for a checkout."""

    __version__ = 1

    user_id = Identifier(required=True)
    email = String(required=True)
    amount = Float(required=True)
    balance = Float(required=True)


@shopping.event(part_of="User")
class AddressUpdated:
    """A user replaced their delivery address."""

    __version__ = 1

    user_id = Identifier(required=True)
    email = String(required=True)
