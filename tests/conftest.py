from datetime import timedelta

import pytest
from sqlalchemy import create_engine

from fakes import ADMIN_ID, OTHER_ADMIN_ID
from giveaway_system.database import setup_giveaway_database
from giveaway_system.store import GiveawayStore, utcnow


@pytest.fixture
def engine(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'giveaways.db'}", future=True)
    setup_giveaway_database(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def store(engine):
    return GiveawayStore(engine)


@pytest.fixture
def item(store):
    return store.create_item("Free Nitro", "One month of Discord Nitro", created_by=ADMIN_ID)


@pytest.fixture
def admins(monkeypatch):
    monkeypatch.setenv("BOT_ADMIN_IDS", f"{ADMIN_ID}, {OTHER_ADMIN_ID}")


@pytest.fixture
def future_end():
    return utcnow() + timedelta(hours=1)
