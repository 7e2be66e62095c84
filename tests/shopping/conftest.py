import contextvars
import threading

import pytest
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def shopping_bed():
    from shopping.domain import shopping

    bed = DomainFixture(shopping)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(shopping_bed):
    from shopping.config import reset_settings

    with shopping_bed.domain_context():
        yield
    reset_settings()


@pytest.fixture()
def settings():
    """Known defaults with a short lock timeout."""
    from shopping.config import ShoppingSettings, set_settings

    settings = ShoppingSettings(
        default_address="ADDRESS_NOT_SET",
        default_wallet_money=500.0,
        lock_timeout_seconds=0.2,
    )
    set_settings(settings)
    return settings


@pytest.fixture()
def products():
    """Three catalogue products keyed by a short label."""
    from protean import current_domain
    from shopping.catalogue.product import Product

    repo = current_domain.repository_for(Product)
    catalogue = {
        "P1": Product(name="Notebook", category="Stationery", cost=10.0, rating=4.5),
        "P2": Product(name="Mug", category="Kitchen", cost=5.0, rating=4.0),
        "P3": Product(name="Lamp", category="Home", cost=7.25, rating=3.5),
    }
    for product in catalogue.values():
        repo.add(product)
    return catalogue


def _register(email, wallet_money, address):
    from protean import current_domain
    from shopping.account.user import User

    user = User.register(email=email, name=email.split("@")[0])
    user.wallet_money = wallet_money
    user.address = address
    current_domain.repository_for(User).add(user)
    return user


@pytest.fixture()
def register_user(settings):
    """Factory: ``register_user(email, wallet_money=30.0, address="221B Baker St")``."""

    def _factory(email="alice@example.com", wallet_money=30.0, address="221B Baker St"):
        return _register(email, wallet_money, address)

    return _factory


@pytest.fixture()
def alice(register_user):
    return register_user()


@pytest.fixture()
def run_concurrently():
    """Factory: run ``operation`` from ``workers`` threads released together.

    Each thread runs in a copy of the test's context so it sees the same
    domain. Returns one outcome per thread: ``"ok"`` or the name of the
    domain error it raised.
    """
    from protean.exceptions import ValidationError
    from shopping.shared.errors import ConflictError

    def _run(operation, workers=8):
        barrier = threading.Barrier(workers)
        outcomes = []
        guard = threading.Lock()

        def attempt():
            barrier.wait()
            try:
                operation()
                outcome = "ok"
            except (ConflictError, ValidationError) as exc:
                outcome = type(exc).__name__
            with guard:
                outcomes.append(outcome)

        threads = [
            threading.Thread(target=contextvars.copy_context().run, args=(attempt,)) for _ in range(workers)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=30)

        assert len(outcomes) == workers
        return outcomes

    return _run
