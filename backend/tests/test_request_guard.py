import pytest

from soulchat.services.request_guard import (
    DuplicateRequestError,
    DuplicateRequestGuard,
    request_key,
)


def test_admit_twice_then_release():
    guard = DuplicateRequestGuard()
    assert guard.admit("k") is True
    assert guard.admit("k") is False
    guard.release("k")
    assert guard.admit("k") is True


def test_release_unknown_key_is_noop():
    guard = DuplicateRequestGuard()
    guard.release("missing")
    assert len(guard) == 0


def test_hold_releases_on_success():
    guard = DuplicateRequestGuard()
    with guard.hold("k"):
        assert "k" in guard
    assert "k" not in guard


def test_hold_releases_on_error():
    guard = DuplicateRequestGuard()
    with pytest.raises(RuntimeError):
        with guard.hold("k"):
            raise RuntimeError("boom")
    assert len(guard) == 0


def test_hold_rejects_key_in_flight():
    guard = DuplicateRequestGuard()
    with guard.hold("k"):
        with pytest.raises(DuplicateRequestError):
            with guard.hold("k"):
                pass
        # The rejected attempt must not release the original holder.
        assert "k" in guard
    assert "k" not in guard


def test_request_key_uses_exact_text():
    assert request_key(1, "Hello") == "1-Hello"
    assert request_key(1, "Hello") != request_key(1, "hello")
    assert request_key(1, "Hello") != request_key(2, "Hello")
