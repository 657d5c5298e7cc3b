"""
Giveaway embeds
Renders each giveaway state from store data; messages are never parsed back
"""

import discord

from .config import ACTIVE_COLOR, CANCELLED_COLOR, ENDED_COLOR
from .time_parser import format_local_time


def _base_embed(item, title_suffix, color):
    embed = discord.Embed(
        title=f"🎁 {item['name']}{title_suffix}",
        description=item.get('description') or "No description provided",
        color=color,
        timestamp=discord.utils.utcnow()
    )
    if item.get('image_url'):
        embed.set_image(url=item['image_url'])
    return embed


def build_giveaway_embed(item, end_time, winners_count, participant_count=0, giveaway_id=None):
    """Embed for an open giveaway"""
    embed = _base_embed(item, "", ACTIVE_COLOR)
    embed.add_field(name="⏰ Ends at", value=format_local_time(end_time), inline=True)
    embed.add_field(name="🏆 Winners", value=str(winners_count), inline=True)
    embed.add_field(name="👥 Participants", value=str(participant_count), inline=True)
    embed.set_footer(text=f"Giveaway ID: {giveaway_id}" if giveaway_id else "Loading...")
    return embed


def build_ended_embed(item, winners, participant_count, giveaway_id):
    """Embed for a giveaway that reached its deadline"""
    embed = _base_embed(item, " - ENDED", ENDED_COLOR)
    if winners:
        winners_text = "\n".join(f"<@{user_id}>" for user_id in winners)
    else:
        winners_text = "No winners selected (no participants)"
    embed.add_field(name="🏆 Winners", value=winners_text, inline=False)
    embed.add_field(name="👥 Total Participants", value=str(participant_count), inline=True)
    embed.set_footer(text=f"Giveaway ID: {giveaway_id}")
    return embed


def build_cancelled_embed(item, participant_count, giveaway_id):
    """Embed for a giveaway cancelled by an admin"""
    embed = _base_embed(item, " - CANCELLED", CANCELLED_COLOR)
    embed.add_field(
        name="❌ Status",
        value="This giveaway has been cancelled by an administrator",
        inline=False
    )
    embed.add_field(name="👥 Participants", value=str(participant_count), inline=True)
    embed.set_footer(text=f"Giveaway ID: {giveaway_id}")
    return embed


def build_items_list(items, prefix="."):
    """Plain-text item catalogue for admins"""
    if not items:
        return f"📦 No items found. Use `{prefix}additem` to add your first item."

    item_list = "\n\n".join(
        f"**ID {item['id']}:** {item['name']}\n"
        f"📝 {item.get('description') or 'No description'}\n"
        f"🖼️ {item.get('image_url') or 'No image'}"
        for item in items
    )
    return f"📦 **Available Giveaway Items:**\n\n{item_list}"


def build_item_created(item):
    """Confirmation shown after the item prompt finishes"""
    return (
        "✅ **Item created successfully!**\n\n"
        f"**ID:** {item['id']}\n"
        f"**Name:** {item['name']}\n"
        f"**Description:** {item['description']}\n"
        f"**Image:** {item.get('image_url') or 'None'}"
    )
