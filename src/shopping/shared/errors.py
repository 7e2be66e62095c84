"""Errors raised by the shopping domain beyond Protean's own.

Protean's ``ValidationError`` and ``ObjectNotFoundError`` cover rejected input
and missing aggregates. The two kinds below complete the set:

- ``ConflictError``: the request clashes with state that already exists
  (adding a product that is already in the cart).
- ``InfrastructureError``: storage could not complete a read or write, or a
  user's lock could not be acquired in time. Never a user input problem.
"""


class ConflictError(Exception):
    """The operation conflicts with existing state."""

    def __init__(self, messages: dict):
        super().__init__(messages)
        self.messages = messages


class InfrastructureError(Exception):
    """Storage or coordination failure. Callers may retry with backoff."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
