"""
Database Schema Setup for Giveaway System
Creates the items, giveaways, participants and winners tables
"""

from sqlalchemy import text
import logging

logger = logging.getLogger(__name__)

# SQL schema for giveaway system (PostgreSQL flavour, adapted for SQLite at setup)
GIVEAWAY_SCHEMA_SQL = """
-- ============================================
-- GIVEAWAY SYSTEM DATABASE SCHEMA
-- ============================================

-- Prize catalogue
CREATE TABLE IF NOT EXISTS items (
    id SERIAL PRIMARY KEY,
    name TEXT NOT NULL,
    description TEXT,
    image_url TEXT,
    created_by BIGINT,
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);

-- Giveaways (status: active, ended, cancelled)
CREATE TABLE IF NOT EXISTS giveaways (
    id SERIAL PRIMARY KEY,
    item_id INTEGER NOT NULL REFERENCES items(id),
    guild_id BIGINT,
    channel_id BIGINT NOT NULL,
    message_id BIGINT NOT NULL UNIQUE,
    end_time TIMESTAMP NOT NULL,
    winners_count INTEGER NOT NULL DEFAULT 1,
    status VARCHAR(20) NOT NULL DEFAULT 'active',
    created_by BIGINT,
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
    ended_at TIMESTAMP
);

-- One row per user who joined a giveaway
CREATE TABLE IF NOT EXISTS giveaway_participants (
    id SERIAL PRIMARY KEY,
    giveaway_id INTEGER NOT NULL REFERENCES giveaways(id) ON DELETE CASCADE,
    user_id BIGINT NOT NULL,
    joined_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
    UNIQUE(giveaway_id, user_id)
);

-- Winners drawn at finalization
CREATE TABLE IF NOT EXISTS giveaway_winners (
    id SERIAL PRIMARY KEY,
    giveaway_id INTEGER NOT NULL REFERENCES giveaways(id) ON DELETE CASCADE,
    user_id BIGINT NOT NULL,
    drawn_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
    UNIQUE(giveaway_id, user_id)
);

-- ============================================
-- INDICES
-- ============================================

CREATE INDEX IF NOT EXISTS idx_giveaways_status_end ON giveaways(status, end_time);
CREATE INDEX IF NOT EXISTS idx_giveaways_guild ON giveaways(guild_id);
CREATE INDEX IF NOT EXISTS idx_giveaway_participants_giveaway ON giveaway_participants(giveaway_id);
CREATE INDEX IF NOT EXISTS idx_giveaway_winners_giveaway ON giveaway_winners(giveaway_id);
"""

REQUIRED_TABLES = ['items', 'giveaways', 'giveaway_participants', 'giveaway_winners']


def _split_statements(schema_sql):
    """Split a schema script into single statements (SQLite runs one at a time)"""
    statements = []
    current_statement = []

    for line in schema_sql.split('\n'):
        stripped = line.strip()
        if not stripped or stripped.startswith('--'):
            continue

        current_statement.append(line)

        if stripped.endswith(';'):
            statements.append('\n'.join(current_statement))
            current_statement = []

    return statements


def setup_giveaway_database(engine):
    """
    Create all giveaway system tables and indices

    Args:
        engine: SQLAlchemy engine instance

    Raises:
        Exception: Whatever the database raised; the bot cannot run without its tables
    """
    is_postgres = 'postgresql' in str(engine.url).lower()
    schema_sql = GIVEAWAY_SCHEMA_SQL
    if not is_postgres:
        # SQLite uses AUTOINCREMENT
        schema_sql = schema_sql.replace('SERIAL PRIMARY KEY', 'INTEGER PRIMARY KEY AUTOINCREMENT')

    logger.info("Setting up giveaway database schema...")
    try:
        with engine.begin() as conn:
            for statement in _split_statements(schema_sql):
                conn.execute(text(statement))
    except Exception as e:
        logger.error(f"❌ Failed to setup giveaway database: {e}")
        raise

    logger.info("✅ Giveaway database schema ready")


def verify_giveaway_schema(engine):
    """
    Verify that all required tables exist

    Args:
        engine: SQLAlchemy engine instance

    Returns:
        dict: Status of each table (True/False)
    """
    status = {}
    with engine.connect() as conn:
        for table in REQUIRED_TABLES:
            try:
                conn.execute(text(f"SELECT 1 FROM {table} LIMIT 1"))
                status[table] = True
            except Exception:
                conn.rollback()
                status[table] = False
    return status
