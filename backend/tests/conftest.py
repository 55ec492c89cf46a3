import random

import httpx
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from couplegame.core.config import settings
from couplegame.core.database import Base, get_db
from couplegame.models import player, question, response, room  # 注册所有模型
from couplegame.services.question_bank import QuestionBank, SEED_QUESTIONS
from main import app


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
async def seeded_db(db):
    await QuestionBank(db).seed(SEED_QUESTIONS)
    return db


@pytest.fixture
def rng():
    return random.Random(2024)


@pytest.fixture
def small_question_sets(monkeypatch):
    """每个房间只冻结一道quiz题，其它类别不分配"""
    monkeypatch.setattr(settings, "QUIZ_QUESTION_COUNT", 1)
    monkeypatch.setattr(settings, "THIS_THAT_QUESTION_COUNT", 0)
    monkeypatch.setattr(settings, "LIKELY_QUESTION_COUNT", 0)
    monkeypatch.setattr(settings, "WOULD_YOU_RATHER_QUESTION_COUNT", 0)
    monkeypatch.setattr(settings, "DARE_ROUND_COUNT", 0)


@pytest.fixture
async def api(seeded_db, session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client
    app.dependency_overrides.clear()
