"""Tests for Authenticator — credential checks and the failure delay."""

from __future__ import annotations

import asyncio
import time

import pytest

from vroot.auth import FAILURE_DELAY, Authenticator, password_ok
from vroot.fs.exceptions import AuthenticationError, BadPasswordError, BadUserError
from vroot.passwords import hash_password
from vroot.users import IdentityStore, User

DELAY = 0.05


@pytest.fixture
def auth(users: IdentityStore) -> Authenticator:
    return Authenticator(users, failure_delay=DELAY)


# ---------------------------------------------------------------------------
# Success
# ---------------------------------------------------------------------------


class TestSuccess:
    async def test_returns_user(self, auth: Authenticator, alice: User):
        assert await auth.authenticate("alice", "wonderland") is alice

    async def test_whitespace_trimmed(self, auth: Authenticator, alice: User):
        assert await auth.authenticate("alice", "  wonderland\n") is alice

    async def test_no_delay_on_success(self, users: IdentityStore):
        auth = Authenticator(users, failure_delay=5)
        start = time.monotonic()
        await auth.authenticate("alice", "wonderland")
        assert time.monotonic() - start < 1

    async def test_hashed_password(self):
        user = User(name="carol", password=hash_password("s3cret", iterations=1000))
        auth = Authenticator(IdentityStore([user]), failure_delay=DELAY)
        assert await auth.authenticate("carol", "s3cret") is user


# ---------------------------------------------------------------------------
# Failures
# ---------------------------------------------------------------------------


class TestFailures:
    async def test_unknown_user(self, auth: Authenticator):
        with pytest.raises(BadUserError):
            await auth.authenticate("mallory", "wonderland")

    async def test_wrong_password(self, auth: Authenticator):
        with pytest.raises(BadPasswordError):
            await auth.authenticate("alice", "WONDERLAND")

    async def test_missing_password(self, auth: Authenticator):
        with pytest.raises(BadPasswordError):
            await auth.authenticate("alice", None)

    async def test_failures_look_identical(self, auth: Authenticator):
        with pytest.raises(AuthenticationError) as bad_user:
            await auth.authenticate("mallory", "x")
        with pytest.raises(AuthenticationError) as bad_password:
            await auth.authenticate("alice", "x")
        assert str(bad_user.value) == str(bad_password.value)
        assert bad_user.value.kind == bad_password.value.kind

    @pytest.mark.parametrize(
        ("username", "password"),
        [("mallory", "wonderland"), ("alice", "wrong"), ("alice", None)],
    )
    async def test_failure_waits_for_delay(
        self, auth: Authenticator, username: str, password: str | None
    ):
        start = time.monotonic()
        with pytest.raises(AuthenticationError):
            await auth.authenticate(username, password)
        assert time.monotonic() - start >= DELAY * 0.9

    async def test_default_delay_used(self, users: IdentityStore, monkeypatch):
        slept: list[float] = []

        async def fake_sleep(seconds: float) -> None:
            slept.append(seconds)

        monkeypatch.setattr("vroot.auth.asyncio.sleep", fake_sleep)
        auth = Authenticator(users)

        for username in ("mallory", "alice"):
            with pytest.raises(AuthenticationError):
                await auth.authenticate(username, "nope")

        assert FAILURE_DELAY == 1.5
        assert slept == [FAILURE_DELAY, FAILURE_DELAY]


# ---------------------------------------------------------------------------
# password_ok
# ---------------------------------------------------------------------------


class TestPasswordOk:
    def test_case_sensitive(self):
        user = User(name="u", password="Secret")
        assert password_ok(user, "Secret") is True
        assert password_ok(user, "secret") is False

    def test_stored_whitespace_trimmed(self):
        assert password_ok(User(name="u", password=" pw \n"), "pw") is True

    def test_hash_not_accepted_as_plaintext(self):
        digest = hash_password("pw", iterations=1000)
        assert password_ok(User(name="u", password=digest), digest) is False


# ---------------------------------------------------------------------------
# Timing
# ---------------------------------------------------------------------------


async def _fastest_failure(auth: Authenticator, username: str, attempts: int = 3) -> float:
    times = []
    for _ in range(attempts):
        start = time.monotonic()
        with pytest.raises(AuthenticationError):
            await auth.authenticate(username, "wrong")
        times.append(time.monotonic() - start)
    return min(times)


class TestTiming:
    async def test_hashed_store_unknown_user_costs_the_same(self):
        user = User(name="carol", password=hash_password("right"))
        auth = Authenticator(IdentityStore([user]), failure_delay=DELAY)

        unknown = await _fastest_failure(auth, "mallory")
        known = await _fastest_failure(auth, "carol")

        assert abs(known - unknown) < 0.05

    async def test_every_path_derives_one_digest(self, users: IdentityStore, monkeypatch):
        calls: list[str] = []

        def counting_verify(password: str, stored: str) -> bool:
            calls.append(stored)
            return False

        monkeypatch.setattr("vroot.auth.verify_password", counting_verify)
        auth = Authenticator(users, failure_delay=0)

        for username, password in [("mallory", "x"), ("alice", "x"), ("alice", None)]:
            calls.clear()
            with pytest.raises(AuthenticationError):
                await auth.authenticate(username, password)
            assert len(calls) == 1

    async def test_digest_does_not_block_event_loop(self):
        user = User(name="carol", password=hash_password("right"))
        auth = Authenticator(IdentityStore([user]), failure_delay=0)
        ticks = 0
        done = asyncio.Event()

        async def ticker() -> None:
            nonlocal ticks
            while not done.is_set():
                await asyncio.sleep(0.005)
                ticks += 1

        task = asyncio.create_task(ticker())
        await asyncio.sleep(0)
        try:
            assert await auth.authenticate("carol", "right") is user
        finally:
            done.set()
            await task

        assert ticks > 0
