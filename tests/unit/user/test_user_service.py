"""Tests for user registration and roles."""

import pytest

from boutique.core.modules.user.models import UserRole
from boutique.errors import ConflictError, NotFoundError

pytestmark = pytest.mark.anyio


@pytest.fixture
async def user_service(core):
    await core.on_start()
    return core.services.user


async def test_register_sets_user_role(user_service, users):
    user = await user_service.register_user("A", "B", "a@x.com", "123")
    assert user.role == UserRole.USER
    assert users.count({"email": "a@x.com"}) == 1


async def test_register_duplicate_email_conflicts(user_service, users):
    await user_service.register_user("A", "B", "a@x.com", "123")
    with pytest.raises(ConflictError, match="already registered"):
        await user_service.register_user("C", "D", "a@x.com", "456")
    assert users.count({"email": "a@x.com"}) == 1


async def test_register_duplicate_mobile_conflicts(user_service, users):
    await user_service.register_user("A", "B", "a@x.com", "123")
    with pytest.raises(ConflictError):
        await user_service.register_user("C", "D", "c@x.com", "123")
    assert users.count() == 1


async def test_google_sign_in_is_idempotent(user_service, users):
    first, created = await user_service.get_or_create_google_user("Ann", "ann@gmail.com", "https://photo")
    again, created_again = await user_service.get_or_create_google_user("Ann B", "ann@gmail.com", "")

    assert created is True
    assert created_again is False
    assert again.id == first.id
    assert again.name == "Ann"
    assert users.count({"email": "ann@gmail.com"}) == 1


async def test_google_users_without_mobile_do_not_conflict(user_service, users):
    await user_service.get_or_create_google_user("Ann", "ann@gmail.com", "")
    await user_service.get_or_create_google_user("Bob", "bob@gmail.com", "")
    assert users.count() == 2


async def test_google_sign_in_returns_local_account(user_service):
    local = await user_service.register_user("A", "B", "a@x.com", "123")
    user, created = await user_service.get_or_create_google_user("A B", "a@x.com", "")
    assert created is False
    assert user.id == local.id


async def test_google_sign_in_race_returns_winner(user_service, users, make_user):
    winner = make_user("race@gmail.com")
    original_find_one = users.find_one
    misses = iter([None])

    async def find_one_missing_once(query):
        # First lookup happens before the concurrent insert lands
        if next(misses, "seen") is None:
            return None
        return await original_find_one(query)

    users.find_one = find_one_missing_once
    user, created = await user_service.get_or_create_google_user("Racer", "race@gmail.com", "")

    assert created is False
    assert user.id == winner.id
    assert users.count({"email": "race@gmail.com"}) == 1


async def test_get_role_defaults_to_user_without_mutation(user_service, users):
    assert await user_service.get_role("nobody@x.com") == UserRole.USER
    assert await user_service.get_role("nobody@x.com") == UserRole.USER
    assert users.count() == 0
    assert users.insert_calls == 0


async def test_set_role(user_service, make_user):
    user = make_user("a@x.com")
    result = await user_service.set_role(user.id, UserRole.ADMIN)

    assert result.matched_count == 1
    assert result.modified_count == 1
    assert await user_service.get_role("a@x.com") == UserRole.ADMIN


async def test_delete_user(user_service, make_user):
    user = make_user("a@x.com")
    result = await user_service.delete_user(user.id)

    assert result.deleted_count == 1
    with pytest.raises(NotFoundError):
        await user_service.get_user_by_email("a@x.com")
