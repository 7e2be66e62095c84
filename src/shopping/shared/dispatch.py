"""Serialized command processing per user.

Every cart mutation and checkout for a user is processed while holding that
user's lock, so the read-modify-write inside the command handler and the
commit that follows it never interleave with another request for the same
user. Requests for different users take different locks.

Storage failures are translated where the repositories are called
(``shopping.shared.persistence``); anything else raised by a handler
propagates unchanged.
"""

from protean.utils.globals import current_domain

from shopping.config import get_settings
from shopping.shared.locking import KeyedLock

user_locks = KeyedLock()


def process_for_user(user_email: str, command):
    """Process ``command`` synchronously under ``user_email``'s lock and return the handler's result."""
    timeout = get_settings().lock_timeout_seconds
    with user_locks.hold(user_email, timeout=timeout):
        return current_domain.process(command, asynchronous=False)
