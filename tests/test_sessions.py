from datetime import datetime, timedelta, timezone

from giveaway_system.sessions import STEP_NAME, ItemSessionStore


class ClockedSessions(ItemSessionStore):
    """Session store with a hand-driven clock"""

    def __init__(self, timeout_minutes=10):
        super().__init__(timeout_minutes)
        self.now = datetime(2026, 10, 17, 12, 0, tzinfo=timezone.utc)

    def _now(self):
        return self.now


def test_new_draft_starts_at_name_step():
    sessions = ClockedSessions()
    draft = sessions.start(1)
    assert draft.step == STEP_NAME
    assert sessions.get(1) is draft
    assert 1 in sessions


def test_restart_discards_previous_answers():
    sessions = ClockedSessions()
    sessions.start(1).name = "Old"
    assert sessions.start(1).name is None
    assert len(sessions) == 1


def test_draft_expires_after_timeout():
    sessions = ClockedSessions(timeout_minutes=10)
    sessions.start(1)

    sessions.now += timedelta(minutes=9)
    assert sessions.get(1) is not None

    sessions.now += timedelta(minutes=1)
    assert sessions.get(1) is None
    assert len(sessions) == 0


def test_touch_extends_expiry():
    sessions = ClockedSessions(timeout_minutes=10)
    draft = sessions.start(1)

    sessions.now += timedelta(minutes=8)
    sessions.touch(draft)
    sessions.now += timedelta(minutes=8)

    assert sessions.get(1) is draft


def test_finish_and_purge():
    sessions = ClockedSessions(timeout_minutes=10)
    sessions.start(1)
    sessions.start(2)
    sessions.finish(1)
    sessions.finish(1)
    assert 1 not in sessions

    sessions.now += timedelta(minutes=5)
    sessions.start(3)
    sessions.now += timedelta(minutes=6)

    assert sessions.purge_expired() == 1
    assert 2 not in sessions
    assert 3 in sessions
