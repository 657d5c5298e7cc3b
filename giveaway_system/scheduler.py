"""
Giveaway Expiry Scheduler
Periodically closes giveaways that reached their deadline
"""

import logging
from discord.ext import tasks

from .config import SWEEP_INTERVAL_SECONDS

logger = logging.getLogger(__name__)


class GiveawayScheduler:
    """Polls the store for expired giveaways and finalizes them"""

    def __init__(self, bot, manager, sessions=None, interval_seconds=SWEEP_INTERVAL_SECONDS):
        """
        Initialize giveaway scheduler

        Args:
            bot: Discord bot instance
            manager: GiveawayManager that performs finalization
            sessions: ItemSessionStore whose expired drafts are purged each tick
            interval_seconds: Seconds between sweeps
        """
        self.bot = bot
        self.manager = manager
        self.sessions = sessions
        self.interval_seconds = interval_seconds

        self.check_expired_giveaways = tasks.loop(seconds=interval_seconds)(self.run_once)
        self.check_expired_giveaways.before_loop(self.before_check)
        self.check_expired_giveaways.error(self.on_check_error)

        logger.info(f"📅 Giveaway scheduler initialized (every {interval_seconds}s)")

    async def run_once(self, now=None):
        """One sweep: finalize expired giveaways and drop stale item drafts"""
        finalized = await self.manager.sweep_expired(now)
        if finalized:
            logger.info(f"🔔 Closed {finalized} expired giveaway(s)")

        if self.sessions is not None:
            self.sessions.purge_expired()

        return finalized

    async def before_check(self):
        """Wait for the bot to be ready before the first sweep"""
        await self.bot.wait_until_ready()

    async def on_check_error(self, error):
        logger.error(f"Error in giveaway expiry task: {error}", exc_info=error)

    def start(self):
        if not self.check_expired_giveaways.is_running():
            self.check_expired_giveaways.start()
            logger.info("✅ Giveaway expiry task started")

    def stop(self):
        self.check_expired_giveaways.cancel()


def setup_giveaway_scheduler(bot, manager, sessions=None, interval_seconds=SWEEP_INTERVAL_SECONDS):
    """
    Setup automatic giveaway expiry as a Discord bot task

    Returns:
        GiveawayScheduler instance (already started)
    """
    scheduler = GiveawayScheduler(bot, manager, sessions, interval_seconds)
    scheduler.start()
    return scheduler
