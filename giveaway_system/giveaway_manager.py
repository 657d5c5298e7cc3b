"""
Giveaway Manager - Core giveaway logic

Handles giveaway lifecycle, join tracking, and winner selection.
"""

import enum
import logging

import discord

from .draw import select_winners
from .embeds import build_cancelled_embed, build_ended_embed, build_giveaway_embed
from .store import ACTIVE, utcnow
from .views import JoinGiveawayView

logger = logging.getLogger(__name__)


class JoinStatus(enum.Enum):
    JOINED = 'joined'
    ALREADY_JOINED = 'already_joined'
    NOT_ACTIVE = 'not_active'
    EXPIRED = 'expired'


JOIN_REPLIES = {
    JoinStatus.JOINED: "✅ You have successfully joined the giveaway!",
    JoinStatus.ALREADY_JOINED: "❌ You are already participating in this giveaway!",
    JoinStatus.NOT_ACTIVE: "❌ This giveaway is no longer active.",
    JoinStatus.EXPIRED: "❌ This giveaway has already ended.",
}


class GiveawayManager:
    """Runs giveaway state transitions against the store and keeps the public message in sync"""

    def __init__(self, bot, store):
        self.bot = bot
        self.store = store

    def make_view(self, participant_count=0, disabled=False):
        return JoinGiveawayView(self.handle_join_interaction, participant_count, disabled)

    async def fetch_giveaway_message(self, giveaway):
        """Fetch the public message a giveaway was posted as"""
        channel = self.bot.get_channel(giveaway['channel_id'])
        if channel is None:
            channel = await self.bot.fetch_channel(giveaway['channel_id'])
        return await channel.fetch_message(giveaway['message_id'])

    # ========================================
    # START
    # ========================================

    async def start_giveaway(self, channel, item, end_time, winners_count, created_by=None, guild_id=None):
        """
        Post a giveaway message in a channel and record it

        Args:
            channel: Channel to post in
            item: Item dict from the store
            end_time: Aware UTC deadline
            winners_count: Winners to draw
            created_by: Admin user ID
            guild_id: Server ID

        Returns:
            int: New giveaway ID
        """
        view = self.make_view(0)
        message = await channel.send(
            embed=build_giveaway_embed(item, end_time, winners_count, 0),
            view=view
        )

        try:
            giveaway_id = self.store.create_giveaway(
                item_id=item['id'],
                channel_id=channel.id,
                message_id=message.id,
                end_time=end_time,
                winners_count=winners_count,
                created_by=created_by,
                guild_id=guild_id,
            )
        except Exception:
            # Don't leave an orphan message nobody can join
            try:
                await message.delete()
            except discord.HTTPException as e:
                logger.warning(f"Could not delete orphan giveaway message {message.id}: {e}")
            raise

        await message.edit(
            embed=build_giveaway_embed(item, end_time, winners_count, 0, giveaway_id),
            view=view
        )
        return giveaway_id

    # ========================================
    # JOIN
    # ========================================

    def join_giveaway(self, message_id, user_id, now=None):
        """
        Add a user to the giveaway posted as message_id

        Returns:
            tuple: (JoinStatus, giveaway dict or None, participant count or None)
        """
        giveaway = self.store.get_giveaway_by_message(message_id)
        if not giveaway or giveaway['status'] != ACTIVE:
            return JoinStatus.NOT_ACTIVE, giveaway, None

        # Deadline wins over stored status until the sweeper catches up
        now = now or utcnow()
        if now >= giveaway['end_time']:
            return JoinStatus.EXPIRED, giveaway, None

        if not self.store.add_participant(giveaway['id'], user_id):
            return JoinStatus.ALREADY_JOINED, giveaway, None

        participant_count = self.store.count_participants(giveaway['id'])
        return JoinStatus.JOINED, giveaway, participant_count

    async def handle_join_interaction(self, interaction: discord.Interaction):
        """Participate button callback"""
        try:
            status, giveaway, participant_count = self.join_giveaway(interaction.message.id, interaction.user.id)
        except Exception as e:
            logger.error(f"Error handling participation for message {interaction.message.id}: {e}")
            await interaction.response.send_message("❌ Failed to join giveaway. Please try again.", ephemeral=True)
            return

        if status is not JoinStatus.JOINED:
            await interaction.response.send_message(JOIN_REPLIES[status], ephemeral=True)
            return

        embed = build_giveaway_embed(
            giveaway['item'],
            giveaway['end_time'],
            giveaway['winners_count'],
            participant_count,
            giveaway['id']
        )
        # Join is committed at this point
        try:
            await interaction.response.edit_message(embed=embed, view=self.make_view(participant_count))
        except discord.HTTPException as e:
            logger.warning(f"Giveaway #{giveaway['id']}: user {interaction.user.id} joined but the message could not be updated: {e}")

        try:
            if interaction.response.is_done():
                await interaction.followup.send(JOIN_REPLIES[status], ephemeral=True)
            else:
                await interaction.response.send_message(JOIN_REPLIES[status], ephemeral=True)
        except discord.HTTPException as e:
            logger.warning(f"Giveaway #{giveaway['id']}: could not confirm join to user {interaction.user.id}: {e}")

    # ========================================
    # CANCEL
    # ========================================

    async def cancel_giveaway(self, giveaway_id):
        """
        Cancel an active giveaway

        Returns:
            bool: False if the giveaway was not found or no longer active
        """
        giveaway = self.store.get_giveaway(giveaway_id)
        if not giveaway or giveaway['status'] != ACTIVE:
            return False

        if not self.store.cancel_giveaway(giveaway_id):
            return False

        participant_count = self.store.count_participants(giveaway_id)
        try:
            message = await self.fetch_giveaway_message(giveaway)
            await message.edit(
                embed=build_cancelled_embed(giveaway['item'], participant_count, giveaway_id),
                view=self.make_view(participant_count, disabled=True)
            )
        except discord.HTTPException as e:
            logger.warning(f"Giveaway #{giveaway_id} cancelled but its message could not be updated: {e}")

        return True

    # ========================================
    # END
    # ========================================

    async def finalize_giveaway(self, giveaway):
        """
        Draw winners for an expired giveaway and close it

        Returns:
            list: Winner IDs, or None if the giveaway had already been closed
        """
        participants = self.store.get_participant_ids(giveaway['id'])
        winners = select_winners(participants, giveaway['winners_count'])

        if not self.store.end_giveaway(giveaway['id'], winners):
            logger.info(f"Giveaway #{giveaway['id']} was already closed, skipping")
            return None

        try:
            message = await self.fetch_giveaway_message(giveaway)
            await message.edit(
                embed=build_ended_embed(giveaway['item'], winners, len(participants), giveaway['id']),
                view=self.make_view(len(participants), disabled=True)
            )
        except discord.HTTPException as e:
            logger.warning(f"Giveaway #{giveaway['id']} ended but its message could not be updated: {e}")

        logger.info(f"✅ Giveaway #{giveaway['id']} ended. Winners: {len(winners)}")
        return winners

    async def sweep_expired(self, now=None):
        """
        Finalize every active giveaway past its deadline

        A failure on one giveaway is logged and the rest still run; it stays
        active in the store and is retried on the next sweep.

        Returns:
            int: Number of giveaways finalized
        """
        try:
            expired = self.store.get_expired_giveaways(now)
        except Exception as e:
            logger.error(f"Error checking expired giveaways: {e}")
            return 0

        finalized = 0
        for giveaway in expired:
            try:
                if await self.finalize_giveaway(giveaway) is not None:
                    finalized += 1
            except Exception as e:
                logger.error(f"Error ending giveaway #{giveaway['id']}: {e}")

        return finalized
