"""Tests for login sessions."""

from uuid import uuid4

from nutrilog.services.sessions import SessionService, hash_token


def test_token_resolves_to_user(container, session_repository) -> None:
    user_id = uuid4()

    token = container.session_service.create(user_id)

    assert container.session_service.resolve(token) == user_id
    assert token not in session_repository.sessions
    assert hash_token(token) in session_repository.sessions


def test_tokens_are_unique(container) -> None:
    user_id = uuid4()

    tokens = {container.session_service.create(user_id) for _ in range(20)}

    assert len(tokens) == 20


def test_unknown_or_missing_token_resolves_to_none(container) -> None:
    assert container.session_service.resolve(None) is None
    assert container.session_service.resolve("") is None
    assert container.session_service.resolve("not-a-session") is None


def test_deleted_session_no_longer_resolves(container) -> None:
    token = container.session_service.create(uuid4())

    container.session_service.delete(token)
    container.session_service.delete(token)

    assert container.session_service.resolve(token) is None


def test_session_expires_after_configured_days(container, clock) -> None:
    token = container.session_service.create(uuid4())

    clock.advance(days=7)
    assert container.session_service.resolve(token) is not None

    clock.advance(seconds=1)
    assert container.session_service.resolve(token) is None


def test_purge_removes_only_old_sessions(session_repository, clock) -> None:
    service = SessionService(session_repository, session_days=7, clock=clock)
    old_token = service.create(uuid4())
    clock.advance(days=5)
    fresh_token = service.create(uuid4())
    clock.advance(days=3)

    removed = service.purge_expired()

    assert removed == 1
    assert hash_token(old_token) not in session_repository.sessions
    assert service.resolve(fresh_token) is not None


def test_purge_with_explicit_age(session_repository, clock) -> None:
    service = SessionService(session_repository, clock=clock)
    service.create(uuid4())
    clock.advance(days=2)

    assert service.purge_expired(max_age_days=1) == 1
    assert session_repository.sessions == {}
