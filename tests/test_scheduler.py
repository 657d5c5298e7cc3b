"""
Expiry scheduler tests
Runs single ticks directly; the discord task loop itself is not started
"""

from datetime import timedelta

from fakes import FakeBot, FakeChannel
from giveaway_system.giveaway_manager import GiveawayManager
from giveaway_system.scheduler import GiveawayScheduler
from giveaway_system.store import ENDED, utcnow
from test_sessions import ClockedSessions


async def test_tick_finalizes_expired_and_purges_drafts(store, item):
    channel = FakeChannel(5000)
    manager = GiveawayManager(FakeBot(channel), store)
    now = utcnow()
    giveaway_id = await manager.start_giveaway(channel, item, now + timedelta(seconds=30), 1)
    manager.join_giveaway(channel.sent[0].id, 42)

    sessions = ClockedSessions(timeout_minutes=10)
    sessions.start(1)
    sessions.now += timedelta(minutes=11)

    scheduler = GiveawayScheduler(FakeBot(channel), manager, sessions, interval_seconds=60)
    assert await scheduler.run_once(now + timedelta(minutes=1)) == 1

    assert store.get_giveaway(giveaway_id)['status'] == ENDED
    assert store.get_winner_ids(giveaway_id) == [42]
    assert len(sessions) == 0


async def test_tick_with_nothing_due(store):
    scheduler = GiveawayScheduler(FakeBot(), GiveawayManager(FakeBot(), store))
    assert await scheduler.run_once() == 0
    assert not scheduler.check_expired_giveaways.is_running()


async def test_store_outage_does_not_break_the_tick(store, monkeypatch):
    def down(now=None):
        raise RuntimeError("could not connect to server")

    monkeypatch.setattr(store, 'get_expired_giveaways', down)
    scheduler = GiveawayScheduler(FakeBot(), GiveawayManager(FakeBot(), store))

    assert await scheduler.run_once() == 0


async def test_loop_interval_comes_from_config(store):
    scheduler = GiveawayScheduler(FakeBot(), GiveawayManager(FakeBot(), store), interval_seconds=15)
    assert scheduler.check_expired_giveaways.seconds == 15
