"""
Item Creation Sessions
Per-user state for the multi-step additem prompt, with expiry
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional

from .config import ITEM_SESSION_TIMEOUT_MINUTES

logger = logging.getLogger(__name__)

STEP_NAME = 'name'
STEP_DESCRIPTION = 'description'
STEP_IMAGE = 'image'


class ItemDraft:
    """An item being collected from an admin over several DMs"""

    def __init__(self, user_id: int, expires_at: datetime):
        self.user_id = user_id
        self.step = STEP_NAME
        self.name: Optional[str] = None
        self.description: Optional[str] = None
        self.expires_at = expires_at

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at


class ItemSessionStore:
    """Drafts keyed by user ID"""

    def __init__(self, timeout_minutes: int = ITEM_SESSION_TIMEOUT_MINUTES):
        self.timeout = timedelta(minutes=timeout_minutes)
        self._drafts: Dict[int, ItemDraft] = {}

    def _now(self):
        return datetime.now(timezone.utc)

    def start(self, user_id: int) -> ItemDraft:
        """Begin (or restart) a draft for this user"""
        draft = ItemDraft(user_id, self._now() + self.timeout)
        self._drafts[user_id] = draft
        logger.debug(f"Started item draft for user {user_id}")
        return draft

    def get(self, user_id: int) -> Optional[ItemDraft]:
        """Current draft for the user, or None if there is none or it expired"""
        draft = self._drafts.get(user_id)
        if draft is None:
            return None
        if draft.is_expired(self._now()):
            del self._drafts[user_id]
            logger.info(f"⌛ Item draft for user {user_id} expired")
            return None
        return draft

    def touch(self, draft: ItemDraft):
        """Push the expiry back after each answered step"""
        draft.expires_at = self._now() + self.timeout

    def finish(self, user_id: int):
        self._drafts.pop(user_id, None)

    def purge_expired(self) -> int:
        """Drop every expired draft; returns how many were removed"""
        now = self._now()
        expired = [user_id for user_id, draft in self._drafts.items() if draft.is_expired(now)]
        for user_id in expired:
            del self._drafts[user_id]
        if expired:
            logger.info(f"⌛ Purged {len(expired)} expired item draft(s)")
        return len(expired)

    def __contains__(self, user_id):
        return self.get(user_id) is not None

    def __len__(self):
        return len(self._drafts)
