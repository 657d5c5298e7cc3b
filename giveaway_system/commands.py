"""
Discord Commands for Giveaway System
Handles admin commands, the item creation prompt and error replies
"""

import logging
import discord
from discord.ext import commands

from .config import ACTIVE_COLOR, CANCEL_KEYWORD, COMMAND_PREFIX, SKIP_KEYWORD, is_admin
from .embeds import build_item_created, build_items_list
from .errors import DMOnly, GiveawayError, GuildOnly, NotAdmin
from .sessions import STEP_DESCRIPTION, STEP_IMAGE, STEP_NAME
from .time_parser import format_local_time, parse_end_time

logger = logging.getLogger(__name__)


# -------------------------
# Command checks
# -------------------------
def dm_only():
    """Command may only be used in a DM with the bot."""
    async def predicate(ctx):
        if ctx.guild is not None:
            raise DMOnly()
        return True
    return commands.check(predicate)


def guild_only():
    """Command may only be used in a server channel."""
    async def predicate(ctx):
        if ctx.guild is None:
            raise GuildOnly()
        return True
    return commands.check(predicate)


def admin_only():
    """Author must be on the BOT_ADMIN_IDS allow-list."""
    async def predicate(ctx):
        if not is_admin(ctx.author.id):
            raise NotAdmin()
        return True
    return commands.check(predicate)


def parse_positive_int(value):
    """int(value) if it is a whole number >= 1, else None"""
    try:
        number = int(value)
    except (TypeError, ValueError):
        return None
    return number if number >= 1 else None


class GiveawayCommands(commands.Cog):
    """Admin commands for items and giveaways"""

    def __init__(self, bot, store, manager, sessions):
        self.bot = bot
        self.store = store
        self.manager = manager
        self.sessions = sessions

    async def cog_command_error(self, ctx, error):
        """Reply to failed checks with their fixed message"""
        if isinstance(error, (DMOnly, GuildOnly, NotAdmin)):
            await ctx.reply(str(error))
            return
        logger.error(f"Error in command {ctx.command}: {error}")
        await ctx.reply("❌ An error occurred while processing your command.")

    # ========================================
    # ITEM COMMANDS (DM)
    # ========================================

    @commands.command(name='additem')
    @dm_only()
    @admin_only()
    async def add_item(self, ctx):
        """
        Add a new giveaway item through a guided prompt
        Usage: .additem (in DMs)
        """
        self.sessions.start(ctx.author.id)
        await ctx.reply(
            "🎁 **Adding new giveaway item**\n\n"
            "Please enter the **item name**:\n"
            f"*(type `{CANCEL_KEYWORD}` at any time to stop)*"
        )

    @commands.command(name='items')
    @dm_only()
    @admin_only()
    async def list_items(self, ctx):
        """
        List all giveaway items
        Usage: .items (in DMs)
        """
        try:
            items = self.store.list_items()
        except Exception as e:
            logger.error(f"Error fetching items: {e}")
            await ctx.reply("❌ Failed to fetch items.")
            return

        await ctx.reply(build_items_list(items, COMMAND_PREFIX))

    async def handle_item_creation_step(self, message) -> bool:
        """
        Feed a DM into the author's item draft

        Returns:
            bool: True if the message belonged to an item draft
        """
        if message.guild is not None:
            return False

        draft = self.sessions.get(message.author.id)
        if draft is None:
            return False

        content = message.content.strip()

        # Commands still run mid-draft (.additem restarts it); the draft waits for the next answer
        if content.startswith(COMMAND_PREFIX):
            return False

        if content.lower() == CANCEL_KEYWORD:
            self.sessions.finish(message.author.id)
            await message.reply("🛑 Item creation cancelled.")
            return True

        if draft.step == STEP_NAME:
            if not content:
                await message.reply("❌ The item name cannot be empty. Please enter the **item name**:")
                return True
            draft.name = content
            draft.step = STEP_DESCRIPTION
            self.sessions.touch(draft)
            await message.reply("📝 **Item name saved!**\n\nNow enter the **description** for this item:")

        elif draft.step == STEP_DESCRIPTION:
            if not content:
                await message.reply("❌ The description cannot be empty. Please enter the **description**:")
                return True
            draft.description = content
            draft.step = STEP_IMAGE
            self.sessions.touch(draft)
            await message.reply(
                "🖼️ **Description saved!**\n\n"
                f"Now send an **image URL** for this item (or type \"{SKIP_KEYWORD}\" to skip):"
            )

        elif draft.step == STEP_IMAGE:
            if content.lower() == SKIP_KEYWORD:
                image_url = None
            elif content:
                image_url = content
            elif message.attachments:
                image_url = message.attachments[0].url
            else:
                await message.reply(f"❌ Please send an image URL or type \"{SKIP_KEYWORD}\":")
                return True

            self.sessions.finish(message.author.id)
            try:
                item = self.store.create_item(draft.name, draft.description, image_url, message.author.id)
            except Exception as e:
                logger.error(f"Error creating item for user {message.author.id}: {e}")
                await message.reply("❌ Failed to create item. Please try again.")
                return True

            await message.reply(build_item_created(item))

        return True

    # ========================================
    # GIVEAWAY COMMANDS (SERVER)
    # ========================================

    @commands.command(name='giveaway')
    @guild_only()
    @admin_only()
    async def start_giveaway(self, ctx, *args):
        """
        Start a giveaway in this channel
        Usage: .giveaway <item_id> <end_time> <winners_count>
        Example: .giveaway 1 9:00AM 2
        """
        if len(args) != 3:
            await ctx.reply(
                f"❌ **Usage:** `{COMMAND_PREFIX}giveaway <item_id> <end_time> <winners_count>`\n"
                f"**Example:** `{COMMAND_PREFIX}giveaway 1 9:00AM 2`"
            )
            return

        item_arg, time_arg, winners_arg = args

        try:
            item_id = int(item_arg)
        except ValueError:
            await ctx.reply("❌ Invalid item ID. It must be a number.")
            return

        winners_count = parse_positive_int(winners_arg)
        if winners_count is None:
            await ctx.reply("❌ Winners count must be a positive number.")
            return

        try:
            end_time = parse_end_time(time_arg)
        except GiveawayError as e:
            await ctx.reply(f"❌ {e}")
            return

        try:
            item = self.store.get_item(item_id)
            if not item:
                await ctx.reply(f"❌ Item not found. Use `{COMMAND_PREFIX}items` to see available items.")
                return

            giveaway_id = await self.manager.start_giveaway(
                ctx.channel,
                item,
                end_time,
                winners_count,
                created_by=ctx.author.id,
                guild_id=ctx.guild.id
            )
        except Exception as e:
            logger.error(f"Error starting giveaway for item #{item_id}: {e}")
            await ctx.reply("❌ Failed to start giveaway.")
            return

        await ctx.reply(f"✅ Giveaway started successfully! **Giveaway ID:** {giveaway_id}")

    @commands.command(name='cancel')
    @guild_only()
    @admin_only()
    async def cancel_giveaway(self, ctx, *args):
        """
        Cancel an active giveaway
        Usage: .cancel <giveaway_id>
        """
        if len(args) != 1:
            await ctx.reply(
                f"❌ **Usage:** `{COMMAND_PREFIX}cancel <giveaway_id>`\n"
                f"**Example:** `{COMMAND_PREFIX}cancel 5`"
            )
            return

        try:
            giveaway_id = int(args[0])
        except ValueError:
            await ctx.reply("❌ Invalid giveaway ID. It must be a number.")
            return

        try:
            cancelled = await self.manager.cancel_giveaway(giveaway_id)
        except Exception as e:
            logger.error(f"Error cancelling giveaway #{giveaway_id}: {e}")
            await ctx.reply("❌ Failed to cancel giveaway.")
            return

        if not cancelled:
            await ctx.reply("❌ Giveaway not found or already ended/cancelled.")
            return

        await ctx.reply(f"✅ Giveaway #{giveaway_id} has been cancelled.")

    @commands.command(name='giveaways')
    @guild_only()
    @admin_only()
    async def list_giveaways(self, ctx):
        """
        List active giveaways in this server
        Usage: .giveaways
        """
        try:
            giveaways = self.store.list_active_giveaways(ctx.guild.id)
            lines = []
            for giveaway in giveaways:
                participant_count = self.store.count_participants(giveaway['id'])
                lines.append(
                    f"**#{giveaway['id']}** {giveaway['item']['name']} - "
                    f"{participant_count} participants - "
                    f"{giveaway['winners_count']} winner(s) - "
                    f"ends {format_local_time(giveaway['end_time'])} in <#{giveaway['channel_id']}>"
                )
        except Exception as e:
            logger.error(f"Error listing giveaways for guild {ctx.guild.id}: {e}")
            await ctx.reply("❌ Failed to fetch giveaways.")
            return

        if not lines:
            await ctx.reply("🎁 No active giveaways.")
            return

        embed = discord.Embed(
            title="🎁 Active Giveaways",
            description="\n".join(lines),
            color=ACTIVE_COLOR
        )
        await ctx.reply(embed=embed)


async def setup(bot, store, manager, sessions):
    """Add giveaway commands to bot"""
    cog = GiveawayCommands(bot, store, manager, sessions)
    await bot.add_cog(cog)
    logger.info("✅ Giveaway commands loaded")
    return cog
