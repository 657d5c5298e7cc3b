"""
Giveaway System Package
Admin-run item giveaways with button entry and automatic winner draws
"""

__version__ = "1.0.0"

# Export main components
from .commands import GiveawayCommands
from .draw import select_winners
from .giveaway_manager import GiveawayManager, JoinStatus
from .scheduler import GiveawayScheduler, setup_giveaway_scheduler
from .sessions import ItemSessionStore
from .store import GiveawayStore
from .time_parser import parse_end_time

__all__ = [
    'GiveawayCommands',
    'GiveawayManager',
    'GiveawayScheduler',
    'GiveawayStore',
    'ItemSessionStore',
    'JoinStatus',
    'parse_end_time',
    'select_winners',
    'setup_giveaway_scheduler'
]
