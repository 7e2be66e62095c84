"""Delivery address management: command, handler and entry point."""

from protean import handle
from protean.fields import String
from protean.utils.globals import current_domain

from shopping.account.user import User
from shopping.domain import shopping
from shopping.shared.dispatch import process_for_user
from shopping.shared.persistence import persist


@shopping.command(part_of="User")
class UpdateAddress:
    email = String(required=True, max_length=255)
    address = String(required=True, max_length=500)


@shopping.command_handler(part_of=User)
class ManageAddressHandler:
    @handle(UpdateAddress)
    def update_address(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get_by_email(command.email)
        user.update_address(command.address)
        persist(repo, user)
        return user


def update_address(user_email: str, address: str) -> User:
    """Replace the user's delivery address. Serialized with their cart and checkout operations."""
    return process_for_user(user_email, UpdateAddress(email=user_email, address=address))
