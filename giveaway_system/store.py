"""
Giveaway Store
Row access for items, giveaways, participants and winners
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError

from utils.error_helpers import db_error_handler

logger = logging.getLogger(__name__)

ACTIVE = 'active'
ENDED = 'ended'
CANCELLED = 'cancelled'

GIVEAWAY_SELECT = """
    SELECT g.id, g.item_id, g.guild_id, g.channel_id, g.message_id, g.end_time,
           g.winners_count, g.status, g.created_by, g.created_at, g.ended_at,
           i.name AS item_name, i.description AS item_description, i.image_url AS item_image_url
    FROM giveaways g
    JOIN items i ON i.id = g.item_id
"""


def utcnow():
    return datetime.now(timezone.utc)


def to_db_time(value):
    """Store timestamps as naive UTC"""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def from_db_time(value):
    """Timestamps come back as datetime (PostgreSQL) or str (SQLite)"""
    if value is None:
        return None
    if isinstance(value, str):
        value = datetime.fromisoformat(value)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def _giveaway_from_row(row):
    data = dict(row._mapping)
    giveaway = {
        'id': data['id'],
        'item_id': data['item_id'],
        'guild_id': data['guild_id'],
        'channel_id': data['channel_id'],
        'message_id': data['message_id'],
        'end_time': from_db_time(data['end_time']),
        'winners_count': data['winners_count'],
        'status': data['status'],
        'created_by': data['created_by'],
        'created_at': from_db_time(data['created_at']),
        'ended_at': from_db_time(data['ended_at']),
        'item': {
            'id': data['item_id'],
            'name': data['item_name'],
            'description': data['item_description'],
            'image_url': data['item_image_url'],
        },
    }
    return giveaway


class GiveawayStore:
    """Reads and writes giveaway state; every call goes to the database"""

    def __init__(self, engine):
        self.engine = engine

    # ========================================
    # ITEMS
    # ========================================

    @db_error_handler
    def create_item(self, name, description, image_url=None, created_by=None):
        """Insert a prize item and return it as a dict"""
        with self.engine.begin() as conn:
            item_id = conn.execute(text("""
                INSERT INTO items (name, description, image_url, created_by)
                VALUES (:name, :description, :image_url, :created_by)
                RETURNING id
            """), {
                'name': name,
                'description': description,
                'image_url': image_url,
                'created_by': created_by,
            }).scalar()

        logger.info(f"🎁 Created item #{item_id}: {name}")
        return {'id': item_id, 'name': name, 'description': description, 'image_url': image_url}

    @db_error_handler
    def get_item(self, item_id):
        with self.engine.connect() as conn:
            row = conn.execute(text("""
                SELECT id, name, description, image_url
                FROM items
                WHERE id = :item_id
            """), {'item_id': item_id}).fetchone()
        return dict(row._mapping) if row else None

    @db_error_handler
    def list_items(self):
        """All items ordered by id"""
        with self.engine.connect() as conn:
            rows = conn.execute(text("""
                SELECT id, name, description, image_url
                FROM items
                ORDER BY id ASC
            """)).fetchall()
        return [dict(row._mapping) for row in rows]

    # ========================================
    # GIVEAWAYS
    # ========================================

    @db_error_handler
    def create_giveaway(self, item_id, channel_id, message_id, end_time, winners_count,
                        created_by=None, guild_id=None):
        """Insert an active giveaway and return its ID"""
        with self.engine.begin() as conn:
            giveaway_id = conn.execute(text("""
                INSERT INTO giveaways
                    (item_id, guild_id, channel_id, message_id, end_time, winners_count, status, created_by)
                VALUES
                    (:item_id, :guild_id, :channel_id, :message_id, :end_time, :winners_count, 'active', :created_by)
                RETURNING id
            """), {
                'item_id': item_id,
                'guild_id': guild_id,
                'channel_id': channel_id,
                'message_id': message_id,
                'end_time': to_db_time(end_time),
                'winners_count': winners_count,
                'created_by': created_by,
            }).scalar()

        logger.info(f"🎉 Created giveaway #{giveaway_id} for item #{item_id} (ends {end_time.isoformat()})")
        return giveaway_id

    @db_error_handler
    def get_giveaway(self, giveaway_id):
        with self.engine.connect() as conn:
            row = conn.execute(text(GIVEAWAY_SELECT + " WHERE g.id = :giveaway_id"),
                               {'giveaway_id': giveaway_id}).fetchone()
        return _giveaway_from_row(row) if row else None

    @db_error_handler
    def get_giveaway_by_message(self, message_id):
        with self.engine.connect() as conn:
            row = conn.execute(text(GIVEAWAY_SELECT + " WHERE g.message_id = :message_id"),
                               {'message_id': message_id}).fetchone()
        return _giveaway_from_row(row) if row else None

    @db_error_handler
    def list_active_giveaways(self, guild_id=None):
        """Active giveaways, soonest deadline first"""
        with self.engine.connect() as conn:
            rows = conn.execute(text(GIVEAWAY_SELECT + """
                WHERE g.status = 'active'
                AND (:guild_id IS NULL OR g.guild_id = :guild_id)
                ORDER BY g.end_time ASC
            """), {'guild_id': guild_id}).fetchall()
        return [_giveaway_from_row(row) for row in rows]

    @db_error_handler
    def get_expired_giveaways(self, now=None):
        """Active giveaways whose end time is at or before now"""
        now = now or utcnow()
        with self.engine.connect() as conn:
            rows = conn.execute(text(GIVEAWAY_SELECT + """
                WHERE g.status = 'active'
                AND g.end_time <= :now
                ORDER BY g.end_time ASC
            """), {'now': to_db_time(now)}).fetchall()
        return [_giveaway_from_row(row) for row in rows]

    @db_error_handler
    def end_giveaway(self, giveaway_id, winner_ids):
        """
        Mark a giveaway ended and record its winners in one transaction

        Returns:
            bool: False if the giveaway was no longer active (nothing written)
        """
        with self.engine.begin() as conn:
            updated = conn.execute(text("""
                UPDATE giveaways
                SET status = 'ended', ended_at = :now
                WHERE id = :giveaway_id
                AND status = 'active'
            """), {'giveaway_id': giveaway_id, 'now': to_db_time(utcnow())}).rowcount

            if not updated:
                return False

            for user_id in winner_ids:
                conn.execute(text("""
                    INSERT INTO giveaway_winners (giveaway_id, user_id)
                    VALUES (:giveaway_id, :user_id)
                """), {'giveaway_id': giveaway_id, 'user_id': user_id})

        logger.info(f"✅ Giveaway #{giveaway_id} ended with {len(winner_ids)} winner(s)")
        return True

    @db_error_handler
    def cancel_giveaway(self, giveaway_id):
        """
        Mark an active giveaway cancelled

        Returns:
            bool: False if it did not exist or was no longer active
        """
        with self.engine.begin() as conn:
            updated = conn.execute(text("""
                UPDATE giveaways
                SET status = 'cancelled', ended_at = :now
                WHERE id = :giveaway_id
                AND status = 'active'
            """), {'giveaway_id': giveaway_id, 'now': to_db_time(utcnow())}).rowcount

        if updated:
            logger.info(f"🛑 Giveaway #{giveaway_id} cancelled")
        return bool(updated)

    # ========================================
    # PARTICIPANTS & WINNERS
    # ========================================

    def add_participant(self, giveaway_id, user_id):
        """
        Record a join

        Returns:
            bool: False if the user had already joined (unique constraint)
        """
        try:
            with self.engine.begin() as conn:
                conn.execute(text("""
                    INSERT INTO giveaway_participants (giveaway_id, user_id)
                    VALUES (:giveaway_id, :user_id)
                """), {'giveaway_id': giveaway_id, 'user_id': user_id})
        except IntegrityError:
            logger.debug(f"User {user_id} already joined giveaway #{giveaway_id}")
            return False
        except Exception as e:
            logger.error(f"Database error adding participant {user_id} to giveaway #{giveaway_id}: {e}",
                         exc_info=True)
            raise

        logger.info(f"User {user_id} joined giveaway #{giveaway_id}")
        return True

    @db_error_handler
    def count_participants(self, giveaway_id):
        with self.engine.connect() as conn:
            return conn.execute(text("""
                SELECT COUNT(*) FROM giveaway_participants
                WHERE giveaway_id = :giveaway_id
            """), {'giveaway_id': giveaway_id}).scalar() or 0

    @db_error_handler
    def get_participant_ids(self, giveaway_id):
        """Participant user IDs in join order"""
        with self.engine.connect() as conn:
            rows = conn.execute(text("""
                SELECT user_id FROM giveaway_participants
                WHERE giveaway_id = :giveaway_id
                ORDER BY id ASC
            """), {'giveaway_id': giveaway_id}).fetchall()
        return [row[0] for row in rows]

    @db_error_handler
    def get_winner_ids(self, giveaway_id):
        with self.engine.connect() as conn:
            rows = conn.execute(text("""
                SELECT user_id FROM giveaway_winners
                WHERE giveaway_id = :giveaway_id
                ORDER BY id ASC
            """), {'giveaway_id': giveaway_id}).fetchall()
        return [row[0] for row in rows]
