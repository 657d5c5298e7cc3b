"""
Stand-ins for the discord.py objects the giveaway code talks to
"""

import itertools
from types import SimpleNamespace

import discord

ADMIN_ID = 111111111111111111
OTHER_ADMIN_ID = 222222222222222222
NON_ADMIN_ID = 999999999999999999
GUILD_ID = 424242

_message_ids = itertools.count(900000)


def not_found(text="Unknown Message"):
    return discord.NotFound(SimpleNamespace(status=404, reason="Not Found"), text)


def server_error(text="Internal Server Error"):
    return discord.HTTPException(SimpleNamespace(status=500, reason="Internal Server Error"), text)


class FakeMessage:
    def __init__(self, channel=None, content=None, embed=None, view=None,
                 author_id=None, guild=None, attachments=None):
        self.id = next(_message_ids)
        self.channel = channel
        self.content = content
        self.embed = embed
        self.view = view
        self.author = SimpleNamespace(id=author_id, bot=False)
        self.guild = guild
        self.attachments = attachments or []
        self.edits = []
        self.replies = []
        self.deleted = False

    async def edit(self, **kwargs):
        self.edits.append(kwargs)
        self.embed = kwargs.get('embed', self.embed)
        self.view = kwargs.get('view', self.view)

    async def delete(self):
        self.deleted = True
        if self.channel is not None:
            self.channel.messages.pop(self.id, None)

    async def reply(self, content=None, **kwargs):
        self.replies.append(content)


class FakeChannel:
    def __init__(self, channel_id=5000):
        self.id = channel_id
        self.messages = {}
        self.sent = []

    async def send(self, content=None, embed=None, view=None):
        message = FakeMessage(self, content=content, embed=embed, view=view)
        self.messages[message.id] = message
        self.sent.append(message)
        return message

    async def fetch_message(self, message_id):
        if message_id not in self.messages:
            raise not_found()
        return self.messages[message_id]


class FakeBot:
    def __init__(self, *channels):
        self.channels = {channel.id: channel for channel in channels}

    def get_channel(self, channel_id):
        return self.channels.get(channel_id)

    async def fetch_channel(self, channel_id):
        raise not_found("Unknown Channel")


class FakeResponse:
    def __init__(self):
        self.sent = []
        self.edits = []
        self._done = False

    def is_done(self):
        return self._done

    async def send_message(self, content=None, ephemeral=False, **kwargs):
        self.sent.append((content, ephemeral))
        self._done = True

    async def edit_message(self, **kwargs):
        self.edits.append(kwargs)
        self._done = True


class FakeFollowup:
    def __init__(self):
        self.sent = []

    async def send(self, content=None, ephemeral=False, **kwargs):
        self.sent.append((content, ephemeral))


class FakeInteraction:
    def __init__(self, message, user_id):
        self.message = message
        self.user = SimpleNamespace(id=user_id)
        self.response = FakeResponse()
        self.followup = FakeFollowup()


class FakeContext:
    """Just enough of commands.Context for the giveaway cog"""

    def __init__(self, author_id, guild_id=None, channel=None):
        self.author = SimpleNamespace(id=author_id, bot=False)
        self.guild = SimpleNamespace(id=guild_id) if guild_id is not None else None
        self.channel = channel or FakeChannel()
        self.command = None
        self.replies = []

    async def reply(self, content=None, embed=None, **kwargs):
        self.replies.append(content if content is not None else embed)
