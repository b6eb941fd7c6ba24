"""
Shared fixtures: an in-memory SQLite database with the test models and the
collection table created.
"""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session

from has_easy import ThingBase
from tests.utils.models import Base


@pytest.fixture
def engine():
    engine = create_engine("sqlite://")
    Base.metadata.create_all(engine)
    ThingBase.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session
