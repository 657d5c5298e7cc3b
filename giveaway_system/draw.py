"""
Giveaway Draw Logic
Picks winners uniformly at random using the OS cryptographic RNG
"""

import logging
import secrets

logger = logging.getLogger(__name__)

_rng = secrets.SystemRandom()


def select_winners(participants, count):
    """
    Select winners from a list of participant IDs

    Args:
        participants: Distinct participant IDs, in join order
        count: Number of winners requested (>= 1)

    Returns:
        list: Everyone when there are not more participants than winners,
        otherwise `count` participants sampled without replacement
    """
    if count < 1:
        raise ValueError("Winners count must be at least 1")

    participants = list(participants)
    if not participants:
        return []
    if len(participants) <= count:
        return participants

    winners = _rng.sample(participants, count)
    logger.debug(f"🎲 Drew {count} winners from {len(participants)} participants")
    return winners
