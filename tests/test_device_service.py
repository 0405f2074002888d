"""Device challenge store state machine."""

from datetime import datetime, timedelta, timezone

import pytest
from sqlmodel import Session, select

from jot.errors import ChallengeExists
from jot.models.device_auth import DeviceAuth
from jot.services.device_service import (
    ChallengeState,
    attach_token,
    create_challenge,
    delete_challenge,
    get_challenge_status,
    purge_expired,
)


def _add_expired(db: Session, code: str, token: str | None = None) -> None:
    db.add(DeviceAuth(
        device_code=code,
        token=token,
        expire_date=datetime.now(timezone.utc) - timedelta(minutes=1),
    ))
    db.commit()


def test_full_lifecycle(db):
    create_challenge("abc", db, expire_minutes=10)
    assert get_challenge_status("abc", db).state is ChallengeState.PENDING

    assert attach_token("abc", "tok", db) is True
    status = get_challenge_status("abc", db)
    assert status.state is ChallengeState.FULFILLED
    assert status.token == "tok"

    assert delete_challenge("abc", db) is True
    assert get_challenge_status("abc", db).state is ChallengeState.NO_CHALLENGE
    assert delete_challenge("abc", db) is False


def test_unknown_code_has_no_challenge(db):
    status = get_challenge_status("never-created", db)

    assert status.state is ChallengeState.NO_CHALLENGE
    assert status.token is None


def test_attach_to_unknown_code_returns_false(db):
    assert attach_token("missing", "tok", db) is False


def test_create_sets_expiry_horizon(db):
    before = datetime.now(timezone.utc).replace(tzinfo=None)
    challenge = create_challenge("horizon", db, expire_minutes=10)

    expire = challenge.expire_date.replace(tzinfo=None)
    assert timedelta(minutes=9) < expire - before <= timedelta(minutes=10, seconds=5)
    assert challenge.token is None


def test_duplicate_code_is_rejected(db):
    create_challenge("dup", db, expire_minutes=10)

    with pytest.raises(ChallengeExists):
        create_challenge("dup", db, expire_minutes=10)

    # The original challenge is untouched
    assert get_challenge_status("dup", db).state is ChallengeState.PENDING


def test_expired_challenge_looks_absent(db):
    _add_expired(db, "old", token="tok")

    assert get_challenge_status("old", db).state is ChallengeState.NO_CHALLENGE


def test_expired_challenge_cannot_be_fulfilled(db):
    _add_expired(db, "late")

    assert attach_token("late", "tok", db) is False


def test_expired_challenge_can_still_be_deleted(db):
    _add_expired(db, "stale")

    assert delete_challenge("stale", db) is True


def test_last_attach_wins(db):
    create_challenge("race", db, expire_minutes=10)

    assert attach_token("race", "first", db) is True
    assert attach_token("race", "second", db) is True
    assert get_challenge_status("race", db).token == "second"


def test_purge_removes_only_expired(db):
    _add_expired(db, "gone-1")
    _add_expired(db, "gone-2", token="tok")
    create_challenge("live", db, expire_minutes=10)

    assert purge_expired(db) == 2

    codes = [c.device_code for c in db.exec(select(DeviceAuth)).all()]
    assert codes == ["live"]
    assert purge_expired(db) == 0
