"""
Giveaway system exceptions
"""

from discord.ext import commands


class GiveawayError(Exception):
    """Base class for giveaway domain errors"""


class InvalidTimeFormat(GiveawayError, ValueError):
    """End time string does not look like 9:00AM / 11:30PM"""

    def __init__(self, message="Invalid time format. Use HH:MMAM or HH:MMPM (e.g., 9:00AM, 11:30PM)"):
        super().__init__(message)


class InvalidTimeRange(GiveawayError, ValueError):
    """End time has hours or minutes out of range"""

    def __init__(self, message="Invalid time. Hours must be 1-12, minutes 0-59"):
        super().__init__(message)


# Command check failures, answered with a fixed rejection message

class NotAdmin(commands.CheckFailure):
    def __init__(self):
        super().__init__("❌ You are not authorized to use this command.")


class DMOnly(commands.CheckFailure):
    def __init__(self):
        super().__init__("❌ This command can only be used in DMs with the bot.")


class GuildOnly(commands.CheckFailure):
    def __init__(self):
        super().__init__("❌ This command can only be used in server channels.")
