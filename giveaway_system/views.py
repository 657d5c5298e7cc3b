"""
Giveaway join button
Persistent view so clicks keep working across restarts
"""

import logging
import discord
from discord.ui import View, Button

from .config import JOIN_BUTTON_CUSTOM_ID

logger = logging.getLogger(__name__)


def join_button_label(participant_count):
    return f"🎁 Participate ({participant_count})"


class JoinGiveawayView(View):
    """Button view attached to every giveaway message"""

    def __init__(self, on_join, participant_count=0, disabled=False):
        super().__init__(timeout=None)  # Persistent view
        self.on_join = on_join

        self.join_button = Button(
            style=discord.ButtonStyle.primary,
            label=join_button_label(participant_count),
            custom_id=JOIN_BUTTON_CUSTOM_ID,
            disabled=disabled
        )
        self.join_button.callback = self.join_clicked
        self.add_item(self.join_button)

    async def join_clicked(self, interaction: discord.Interaction):
        """Handle participate button click"""
        try:
            await self.on_join(interaction)
        except Exception as e:
            logger.error(f"Error handling join button interaction: {e}", exc_info=True)
            if not interaction.response.is_done():
                await interaction.response.send_message(
                    "❌ Failed to join giveaway. Please try again.",
                    ephemeral=True
                )
