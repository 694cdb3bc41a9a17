from datetime import datetime, timedelta, timezone

import pytest

from recovery_directory.modules.user_management.domain.models.user import User, UserRole
from recovery_directory.shared.core.exceptions import AuthenticationError, AuthorizationError, NotFoundError, ValidationError


async def test_sign_in_provisions_user_and_records_login(auth_service, auth_provider, user_repo):
    auth_provider.register("sam@example.com", "secret1", "u-sam")

    signed_in = await auth_service.sign_in("sam@example.com", "secret1")

    assert signed_in.session.access_token == "access-u-sam"
    assert signed_in.user.role == UserRole.USER
    assert user_repo.users["u-sam"].last_login is not None


async def test_wrong_password(auth_service, auth_provider):
    auth_provider.register("sam@example.com", "secret1", "u-sam")
    with pytest.raises(AuthenticationError):
        await auth_service.sign_in("sam@example.com", "wrong")


async def test_suspended_user_is_signed_out_again(auth_service, auth_provider, user_repo):
    auth_provider.register("sam@example.com", "secret1", "u-sam")
    user_repo.users["u-sam"] = User(id="u-sam", email="sam@example.com", is_suspended=True)

    with pytest.raises(AuthorizationError):
        await auth_service.sign_in("sam@example.com", "secret1")
    assert auth_provider.signed_out == ["access-u-sam"]


async def test_sign_up_and_refresh(auth_service, user_repo):
    signed_up = await auth_service.sign_up("new@example.com", "secret1")
    assert signed_up.user.id in user_repo.users

    refreshed = await auth_service.refresh(signed_up.session.refresh_token)
    assert refreshed.user.id == signed_up.user.id


async def test_password_reset_request(auth_service, auth_provider):
    await auth_service.request_password_reset("who@example.com")
    assert auth_provider.reset_requests == ["who@example.com"]


async def test_user_stats(user_service, user_repo):
    now = datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)
    user_repo.users["old"] = User(id="old", created_at=now - timedelta(days=90), last_login=now - timedelta(days=60))
    user_repo.users["new"] = User(id="new", created_at=now - timedelta(days=3), last_login=now - timedelta(days=1))
    user_repo.users["idle"] = User(id="idle", created_at=now - timedelta(days=20))

    stats = await user_service.get_user_stats(now=now)

    assert stats.total_users == 3
    assert stats.new_users_this_month == 1
    assert stats.active_users == 1
    assert stats.last_login == now - timedelta(days=1)


async def test_admin_updates(user_service, user_repo):
    user_repo.users["u1"] = User(id="u1", email="old@example.com")

    updated = await user_service.update_user("u1", email="New@Example.com")
    assert updated.email == "new@example.com"
    assert updated.role == UserRole.USER

    promoted = await user_service.update_user_role("u1", UserRole.ADMIN)
    assert promoted.is_admin

    assert (await user_service.suspend_user("u1")).is_suspended
    assert not (await user_service.unsuspend_user("u1")).is_suspended


async def test_blank_email_is_rejected(user_service, user_repo):
    user_repo.users["u1"] = User(id="u1", email="old@example.com")
    with pytest.raises(ValidationError):
        await user_service.update_user("u1", email="  ")


async def test_admin_password_reset(user_service, user_repo, auth_provider):
    user_repo.users["u1"] = User(id="u1", email="u1@example.com")
    user_repo.users["u2"] = User(id="u2")

    await user_service.reset_user_password("u1")
    assert auth_provider.reset_requests == ["u1@example.com"]

    with pytest.raises(ValidationError):
        await user_service.reset_user_password("u2")
    with pytest.raises(NotFoundError):
        await user_service.reset_user_password("missing")
