"""
Test configuration for the promotion engine.
"""
import pytest
from datetime import timedelta
from django.utils import timezone


@pytest.fixture
def now():
    return timezone.now()


@pytest.fixture
def past(now):
    return now - timedelta(days=7)


@pytest.fixture
def future(now):
    return now + timedelta(days=7)


@pytest.fixture
def mixed_cart():
    """Two lines: electronics (70.00) and books (2 x 25.00), subtotal 120.00."""
    from tests.factories import make_item
    return [
        make_item(product_id='phone', seller_id='seller_a', price='70.00', quantity=1, category_id='electronics'),
        make_item(product_id='novel', seller_id='seller_b', price='25.00', quantity=2, category_id='books'),
    ]


@pytest.fixture
def shopper(db):
    from tests.factories import UserFactory
    return UserFactory()


@pytest.fixture
def other_shopper(db):
    from tests.factories import UserFactory
    return UserFactory()
