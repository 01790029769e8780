import pytest

from pharmareserve.core.enums import Role
from pharmareserve.core.exceptions import ConflictError, ValidationError
from pharmareserve.db.models import User


def test_create_and_update_commit(store):
    user = store.create(User, email="a@example.com", full_name="A", hashed_password="x", role="consumer")
    assert user.id is not None

    store.update(user, full_name="B")
    assert store.get(User, user.id).full_name == "B"


def test_find_filters(store, make_user):
    make_user(Role.CONSUMER)
    make_user(Role.PHARMACY)

    assert store.find(User).count() == 2
    assert store.find(User, role="pharmacy").count() == 1


def test_duplicate_email_is_conflict_and_session_survives(store, make_user):
    user = make_user()

    with pytest.raises(ConflictError, match="Email already registered"):
        store.create(User, email=user.email, full_name="Copy", hashed_password="x", role="consumer")

    # Після rollback сесія придатна до роботи
    assert store.find(User).count() == 1


def test_missing_required_column_is_validation_error(store):
    with pytest.raises(ValidationError):
        store.create(User, email="b@example.com", full_name="B", role="consumer")
