import os
import logging

from dotenv import load_dotenv

# -------------------------
# Load config
# -------------------------
# Must run before giveaway_system.config reads the environment
load_dotenv()

import discord  # noqa: E402
from discord.ext import commands  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402

from core.health_server import start_health_server  # noqa: E402
from giveaway_system.commands import setup as setup_giveaway_commands  # noqa: E402
from giveaway_system.config import COMMAND_PREFIX, HEALTH_PORT, get_admin_ids, get_database_url  # noqa: E402
from giveaway_system.database import setup_giveaway_database, verify_giveaway_schema  # noqa: E402
from giveaway_system.giveaway_manager import GiveawayManager  # noqa: E402
from giveaway_system.scheduler import setup_giveaway_scheduler  # noqa: E402
from giveaway_system.sessions import ItemSessionStore  # noqa: E402
from giveaway_system.store import GiveawayStore  # noqa: E402
from utils.logging_config import setup_logging  # noqa: E402

logger = logging.getLogger("bot")

DISCORD_TOKEN = os.getenv("DISCORD_TOKEN")

# Database configuration with cloud PostgreSQL support
DATABASE_URL = get_database_url()

# -------------------------
# Database setup
# -------------------------
engine = create_engine(
    DATABASE_URL,
    future=True,
    pool_pre_ping=True,     # Detect disconnections
    pool_recycle=1800,      # Recycle connections after 30 minutes (hosted DB idle timeout)
    echo=False,             # Don't log all SQL
    connect_args={
        "connect_timeout": 10,           # Connection timeout
        "keepalives": 1,                 # Enable TCP keepalives
        "keepalives_idle": 30,           # Start keepalives after 30s idle
        "keepalives_interval": 10,       # Send keepalive every 10s
        "keepalives_count": 5            # Drop connection after 5 failed keepalives
    } if DATABASE_URL.startswith('postgresql') else {}
)


# -------------------------
# Discord bot setup
# -------------------------
class GiveawayBot(commands.Bot):
    """Prefix-command bot wired to the giveaway system"""

    def __init__(self, engine):
        intents = discord.Intents.default()
        intents.message_content = True
        intents.dm_messages = True
        super().__init__(command_prefix=COMMAND_PREFIX, intents=intents, help_command=None)

        self.engine = engine
        self.store = GiveawayStore(engine)
        self.item_sessions = ItemSessionStore()
        self.giveaway_manager = GiveawayManager(self, self.store)
        self.giveaway_commands = None
        self.giveaway_scheduler = None

    async def setup_hook(self):
        """Runs once before connecting: schema, cog, persistent button, sweeper"""
        setup_giveaway_database(self.engine)
        missing = [table for table, ok in verify_giveaway_schema(self.engine).items() if not ok]
        if missing:
            raise RuntimeError(f"Missing giveaway tables: {', '.join(missing)}")

        self.giveaway_commands = await setup_giveaway_commands(
            self, self.store, self.giveaway_manager, self.item_sessions
        )

        # One persistent handler for every giveaway message's button
        self.add_view(self.giveaway_manager.make_view())

        self.giveaway_scheduler = setup_giveaway_scheduler(self, self.giveaway_manager, self.item_sessions)

    async def on_ready(self):
        logger.info(f"✅ Bot is ready! Logged in as {self.user} (ID: {self.user.id})")
        if not get_admin_ids():
            logger.warning("⚠️ BOT_ADMIN_IDS is empty - nobody can run admin commands")

    async def on_message(self, message):
        if message.author.bot:
            return

        # DMs from admins mid-way through .additem belong to the prompt
        if self.giveaway_commands and await self.giveaway_commands.handle_item_creation_step(message):
            return

        await self.process_commands(message)

    async def on_command_error(self, ctx, error):
        """Handle command errors gracefully."""
        if ctx.cog is not None and ctx.cog.has_error_handler():
            return  # The cog already answered

        try:
            if isinstance(error, commands.CommandNotFound):
                pass  # Ignore unknown commands
            elif isinstance(error, commands.CheckFailure):
                await ctx.reply("❌ You are not authorized to use this command.")
            elif isinstance(error, discord.HTTPException):
                logger.error(f"[HTTP Error] {error}")
                await ctx.reply("❌ A network error occurred. Please try again.")
            else:
                logger.error(f"Command error: {error}")
                await ctx.reply("❌ An error occurred while processing your command.")
        except discord.Forbidden:
            # Bot doesn't have permission to send messages in this channel
            logger.warning(f"[Permission Error] Cannot send error message in channel {ctx.channel.id}: {error}")
        except discord.HTTPException as e:
            logger.error(f"[Critical Error in error handler] {e}")


bot = GiveawayBot(engine)


# -------------------------
# Run bot
# -------------------------
def main():
    setup_logging()

    if not DISCORD_TOKEN:
        raise SystemExit("❌ DISCORD_TOKEN environment variable is required")

    logger.info(f"📊 Using database: {DATABASE_URL.split('@')[1] if '@' in DATABASE_URL else 'SQLite (local)'}")

    start_health_server(HEALTH_PORT, engine)
    bot.run(DISCORD_TOKEN, log_handler=None)


if __name__ == "__main__":
    main()
