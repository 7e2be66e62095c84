"""Storage access helpers shared by the shopping repositories and handlers.

Domain errors pass through untouched; anything else raised by a provider is
reported as ``InfrastructureError`` with the original exception chained.
"""

from collections.abc import Iterator
from contextlib import contextmanager

import structlog
from protean.exceptions import ObjectNotFoundError, ValidationError

from shopping.shared.errors import ConflictError, InfrastructureError

logger = structlog.get_logger(__name__)

_DOMAIN_ERRORS = (ValidationError, ObjectNotFoundError, ConflictError, InfrastructureError)


@contextmanager
def storage_errors(operation: str) -> Iterator[None]:
    """Translate provider failures raised inside the block into ``InfrastructureError``."""
    try:
        yield
    except _DOMAIN_ERRORS:
        raise
    except Exception as exc:
        logger.error("storage_failure", operation=operation, error=str(exc))
        raise InfrastructureError(f"Storage failure during {operation}") from exc


def persist(repository, aggregate):
    """Add ``aggregate`` through ``repository``, reporting provider failures as ``InfrastructureError``."""
    with storage_errors(f"persist {type(aggregate).__name__}"):
        return repository.add(aggregate)
