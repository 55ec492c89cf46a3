from couplegame.core.config import settings
from couplegame.core.utils import ROOM_CODE_ALPHABET
from couplegame.services.picks import PICKS
from couplegame.services.question_bank import SEED_QUESTIONS


async def _create_and_join(api):
    created = await api.post("/api/rooms", json={"name": "Ana", "avatar": "🦊"})
    assert created.status_code == 201
    body = created.json()
    joined = await api.post("/api/rooms/join", json={"code": body["roomCode"].lower(), "name": "Ben"})
    assert joined.status_code == 200
    return body, joined.json()


async def test_create_room_returns_code_and_host(api):
    response = await api.post("/api/rooms", json={"name": "Ana", "metDate": "2021-06-01T00:00:00"})
    assert response.status_code == 201
    body = response.json()
    assert set(body) == {"roomCode", "playerId", "roomId"}
    assert len(body["roomCode"]) == 4
    assert all(c in ROOM_CODE_ALPHABET for c in body["roomCode"])


async def test_create_room_requires_a_name(api):
    response = await api.post("/api/rooms", json={"avatar": "🦊"})
    assert response.status_code == 400
    assert response.json() == {"message": "Invalid input"}


async def test_join_unknown_room_is_404(api):
    response = await api.post("/api/rooms/join", json={"code": "QQQQ", "name": "Ben"})
    assert response.status_code == 404
    assert response.json() == {"message": "Room not found"}


async def test_join_with_malformed_code_is_400(api):
    response = await api.post("/api/rooms/join", json={"code": "ABC", "name": "Ben"})
    assert response.status_code == 400


async def test_status_returns_full_catalog_and_camel_case_fields(api):
    host, partner = await _create_and_join(api)
    response = await api.get(f"/api/rooms/{host['roomCode']}/status")
    assert response.status_code == 200
    status = response.json()

    room = status["room"]
    assert room["code"] == host["roomCode"]
    assert (room["phase"], room["round"]) == ("lobby", 0)
    for key in ("quizQuestions", "thisThatQuestions", "likelyQuestions", "wouldYouRatherQuestions", "dareQuestions"):
        assert room[key]
    assert len(status["questions"]) == len(SEED_QUESTIONS)
    assert [p["id"] for p in status["players"]] == [host["playerId"], partner["playerId"]]
    assert status["players"][0]["avatar"] == "🦊"
    assert status["players"][1]["avatar"] == "🙂"
    assert status["players"][0]["roomId"] == host["roomId"]
    assert status["responses"] == []


async def test_status_unknown_room_is_404(api):
    response = await api.get("/api/rooms/NONE/status")
    assert response.status_code == 404


async def test_next_defaults_to_dashboard_round_zero(api):
    host, _ = await _create_and_join(api)
    response = await api.post(f"/api/rooms/{host['roomCode']}/next", json={})
    assert response.status_code == 200
    assert (response.json()["phase"], response.json()["round"]) == ("dashboard", 0)


async def test_next_accepts_any_player_and_any_state(api):
    host, _ = await _create_and_join(api)
    code = host["roomCode"]
    # 非房主直接调用接口也会被接受
    response = await api.post(f"/api/rooms/{code}/next", json={"phase": "summary", "round": 42})
    assert response.status_code == 200
    assert (response.json()["phase"], response.json()["round"]) == ("summary", 42)


async def test_next_for_unknown_room_is_404(api):
    response = await api.post("/api/rooms/NONE/next", json={"phase": "quiz", "round": 1})
    assert response.status_code == 404


async def test_end_to_end_match_and_finish(api, small_question_sets):
    host, partner = await _create_and_join(api)
    code = host["roomCode"]
    assert partner["playerId"] != host["playerId"]
    assert partner["roomId"] == host["roomId"]

    await api.post(f"/api/rooms/{code}/next", json={"phase": "dashboard", "round": 1})
    await api.post(f"/api/rooms/{code}/next", json={"phase": "quiz", "round": 1})
    room = (await api.get(f"/api/rooms/{code}/status")).json()["room"]
    [question_id] = room["quizQuestions"]
    assert room["likelyQuestions"] == []

    for player_id in (host["playerId"], partner["playerId"]):
        response = await api.post("/api/responses", json={
            "roomId": host["roomId"], "playerId": player_id, "questionId": question_id, "answer": "Pizza"
        })
        assert response.status_code == 201
        assert response.json()["questionId"] == question_id

    status = (await api.get(f"/api/rooms/{code}/status")).json()
    assert len(status["responses"]) == 2

    report = (await api.get(f"/api/rooms/{code}/compatibility")).json()
    assert report["scores"] == {"quiz": 100, "this_that": None, "likely": None, "would_you_rather": None}
    assert report["overall"] == 100
    assert report["vibe"] == "Soulmates?! 🔥"

    # 只有一道题，房主推进后进入总结页
    room = (await api.post(f"/api/rooms/{code}/next", json={"phase": "summary", "round": 1})).json()
    assert (room["phase"], room["round"]) == ("summary", 1)


async def test_room_singleton_slot_keeps_one_row(api):
    host, partner = await _create_and_join(api)
    for player_id, url in ((host["playerId"], "https://youtu.be/one"), (partner["playerId"], "https://youtu.be/two")):
        await api.post("/api/responses", json={
            "roomId": host["roomId"], "playerId": player_id, "questionId": -1, "answer": url
        })

    responses = (await api.get(f"/api/rooms/{host['roomCode']}/status")).json()["responses"]
    assert len(responses) == 1
    assert responses[0]["answer"] == "https://youtu.be/two"


async def test_positive_question_double_submit_keeps_both_rows(api):
    host, _ = await _create_and_join(api)
    payload = {"roomId": host["roomId"], "playerId": host["playerId"], "questionId": 5, "answer": "Tea"}
    await api.post("/api/responses", json=payload)
    await api.post("/api/responses", json=payload)

    responses = (await api.get(f"/api/rooms/{host['roomCode']}/status")).json()["responses"]
    assert len(responses) == 2


async def test_submit_response_requires_all_fields(api):
    response = await api.post("/api/responses", json={"roomId": 1, "answer": "Tea"})
    assert response.status_code == 400
    assert response.json() == {"message": "Invalid input"}


async def test_set_met_date(api):
    host, _ = await _create_and_join(api)
    response = await api.post(f"/api/rooms/{host['roomCode']}/met-date", json={"metDate": "2019-09-09T00:00:00"})
    assert response.status_code == 200
    assert response.json()["metDate"].startswith("2019-09-09")


async def test_strict_mode_rejects_illegal_next(api, monkeypatch):
    monkeypatch.setattr(settings, "ENFORCE_TRANSITIONS", True)
    host, _ = await _create_and_join(api)
    response = await api.post(f"/api/rooms/{host['roomCode']}/next", json={"phase": "summary", "round": 1})
    assert response.status_code == 400


async def test_random_pick(api):
    response = await api.get("/api/picks/random")
    assert response.status_code == 200
    pick = response.json()
    assert pick["content"] in PICKS[pick["type"]]


async def test_health(api):
    response = await api.get("/health")
    assert response.json()["status"] == "healthy"
