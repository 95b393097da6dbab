"""
Channel

Acquiring channels an account is connected through.
"""

from paystore.channel.repository import (
    OrderedMapChannelStore,
    PGPoolChannelStore,
    channel_by_id,
    channel_by_key,
    channel_by_type_id,
    channels_with_limit_and_offset,
)

__all__ = [
    "OrderedMapChannelStore",
    "PGPoolChannelStore",
    "channel_by_id",
    "channel_by_key",
    "channel_by_type_id",
    "channels_with_limit_and_offset",
]
