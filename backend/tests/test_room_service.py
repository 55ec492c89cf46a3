from datetime import datetime

import pytest
from sqlalchemy import create_engine, inspect, text
from sqlalchemy.pool import StaticPool

from couplegame.core.config import settings
from couplegame.core.database import init_db
from couplegame.core.errors import NotFoundError, ValidationError
from couplegame.schemas.room_schemas import NextPhaseRequest, RoomCreate, RoomJoin
from couplegame.services.question_bank import QuestionBank
from couplegame.services.room_service import RoomService


async def test_create_starts_in_lobby(db, rng):
    room = await RoomService(db, rng).create("ab12")
    assert room.code == "AB12"
    assert room.phase == "lobby"
    assert room.round == 0
    assert room.version == 0
    for category in ("quiz", "this_that", "likely", "would_you_rather", "dare"):
        assert room.question_ids(category) == []


async def test_get_by_code_is_case_insensitive(db, rng):
    service = RoomService(db, rng)
    room = await service.create("XY9Z")
    assert (await service.get_by_code("xy9z")).id == room.id
    assert await service.get_by_code("NOPE") is None
    with pytest.raises(NotFoundError):
        await service.require_by_code("NOPE")


async def test_question_set_is_frozen_after_first_assignment(seeded_db, rng):
    service = RoomService(seeded_db, rng)
    room = await service.create("FRZ1")
    pool = await QuestionBank(seeded_db).list_ids_by_category("quiz")

    first = await service.assign_question_set(room.id, "quiz")
    assert len(first) == min(settings.QUIZ_QUESTION_COUNT, len(pool))
    assert len(set(first)) == len(first)
    assert set(first) <= set(pool)

    second = await service.assign_question_set(room.id, "quiz")
    third = await service.assign_question_set(room.id, "quiz", ids=[1, 2, 3])
    assert second == first
    assert third == first

    seeded_db.expire_all()
    assert (await service.get_by_code("FRZ1")).quiz_questions == first


async def test_question_set_size_is_capped_by_the_bank(seeded_db, rng):
    service = RoomService(seeded_db, rng)
    room = await service.create("CAP1")
    dares = await QuestionBank(seeded_db).list_ids_by_category("dare")
    ids = await service.assign_question_set(room.id, "dare")
    assert set(ids) <= set(dares)
    assert len(ids) == min(settings.DARE_ROUND_COUNT, len(dares))


async def test_assign_explicit_ids_and_unknown_category(db, rng):
    service = RoomService(db, rng)
    room = await service.create("EXP1")
    assert await service.assign_question_set(room.id, "likely", ids=[10]) == [10]
    with pytest.raises(ValidationError):
        await service.assign_question_set(room.id, "karaoke")


async def test_empty_bank_leaves_category_unassigned(db, rng):
    service = RoomService(db, rng)
    room = await service.create("EMP1")
    assert await service.assign_question_set(room.id, "likely") == []
    assert room.question_ids("likely") == []


async def test_advance_phase_is_an_unconditional_set(db, rng):
    service = RoomService(db, rng)
    room = await service.create("SET1")
    room = await service.advance_phase(room.id, "summary", 7)
    assert (room.phase, room.round, room.version) == ("summary", 7, 1)
    room = await service.advance_phase(room.id, "lobby", 0)
    assert (room.phase, room.round, room.version) == ("lobby", 0, 2)


async def test_create_room_assigns_sets_and_host(seeded_db, rng):
    service = RoomService(seeded_db, rng)
    room, host = await service.create_room(RoomCreate(name="Ana", met_date=datetime(2020, 2, 14)))
    assert len(room.code) == settings.ROOM_CODE_LENGTH
    assert host.avatar == "🙂"
    assert room.met_date.year == 2020
    for category in ("quiz", "this_that", "likely", "would_you_rather", "dare"):
        assert room.question_ids(category)

    _, partner = await service.join_room(RoomJoin(code=room.code.lower(), name="Ben", avatar="😎"))
    players = await service.list_players(room.id)
    assert [p.id for p in players] == [host.id, partner.id]
    assert players[1].avatar == "😎"


async def test_join_unknown_room(db, rng):
    with pytest.raises(NotFoundError):
        await RoomService(db, rng).join_room(RoomJoin(code="ZZZZ", name="Ben"))


async def test_next_phase_defaults_to_dashboard_round_zero(db, rng):
    service = RoomService(db, rng)
    await service.create("DEF1")
    room = await service.next_phase("DEF1", NextPhaseRequest())
    assert (room.phase, room.round) == ("dashboard", 0)


async def test_next_phase_assigns_missing_set_on_entry(seeded_db, rng):
    service = RoomService(seeded_db, rng)
    await service.create("LAZ1")
    room = await service.next_phase("LAZ1", NextPhaseRequest(phase="would_you_rather", round=1))
    assert room.phase == "would_you_rather"
    assert len(room.question_ids("would_you_rather")) == settings.WOULD_YOU_RATHER_QUESTION_COUNT


async def test_next_phase_is_last_write_wins_by_default(db, rng):
    service = RoomService(db, rng)
    await service.create("LWW1")
    await service.next_phase("LWW1", NextPhaseRequest(phase="quiz", round=3))
    room = await service.next_phase("LWW1", NextPhaseRequest(phase="lobby", round=0, expected_version=99))
    assert (room.phase, room.round) == ("lobby", 0)


async def test_strict_mode_rejects_illegal_transitions(db, rng, monkeypatch):
    monkeypatch.setattr(settings, "ENFORCE_TRANSITIONS", True)
    service = RoomService(db, rng)
    await service.create("STR1")

    with pytest.raises(ValidationError):
        await service.next_phase("STR1", NextPhaseRequest(phase="summary", round=1))

    room = await service.next_phase("STR1", NextPhaseRequest(phase="dashboard", round=1, expected_version=0))
    assert room.version == 1

    with pytest.raises(ValidationError):
        await service.next_phase("STR1", NextPhaseRequest(phase="movie_night", round=1, expected_version=0))


async def test_init_db_migrates_old_rooms_table():
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    with engine.connect() as conn:
        conn.execute(text(
            "CREATE TABLE rooms (id INTEGER PRIMARY KEY, code VARCHAR(8) NOT NULL UNIQUE, "
            "phase VARCHAR(30) NOT NULL, round INTEGER NOT NULL, met_date DATETIME, "
            "quiz_questions JSON, this_that_questions JSON, likely_questions JSON, created_at DATETIME)"
        ))
        conn.commit()

    await init_db(engine)

    columns = {column["name"] for column in inspect(engine).get_columns("rooms")}
    assert {"would_you_rather_questions", "dare_questions", "version"} <= columns
    assert "responses" in inspect(engine).get_table_names()
    engine.dispose()
