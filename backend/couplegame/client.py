"""
轮询客户端

与浏览器端的行为保持一致：每隔 POLL_INTERVAL_SECONDS 拉取一次房间状态，
根据本地状态计算下一个(phase, round)后写回服务端。
“只有房主可以进入下一题”只是客户端约定，服务端并不校验。
"""

import asyncio
import logging
from typing import AsyncIterator, List, Optional
import httpx
from couplegame.core.config import settings
from couplegame.schemas.room_schemas import RoomInfo, RoomStatus
from couplegame.services import phase_controller
from couplegame.services.phase_controller import MEDIA_PHASES, ROUND_PHASES
from couplegame.services.response_service import MOVIE_URL_SLOT, MUSIC_URL_SLOT

logger = logging.getLogger(__name__)


class CoupleGameClient:
    """REST接口的异步封装"""

    def __init__(self, base_url: str = "http://localhost:8001", timeout: float = 10.0,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self._client = httpx.AsyncClient(base_url=base_url, timeout=timeout, transport=transport)

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        await self.close()

    async def close(self):
        await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> dict:
        response = await self._client.request(method, path, **kwargs)
        response.raise_for_status()
        return response.json()

    async def create_room(self, name: str, avatar: Optional[str] = None, met_date: Optional[str] = None) -> dict:
        payload = {"name": name}
        if avatar:
            payload["avatar"] = avatar
        if met_date:
            payload["metDate"] = met_date
        return await self._request("POST", "/api/rooms", json=payload)

    async def join_room(self, code: str, name: str, avatar: Optional[str] = None) -> dict:
        payload = {"code": code.upper(), "name": name}
        if avatar:
            payload["avatar"] = avatar
        return await self._request("POST", "/api/rooms/join", json=payload)

    async def status(self, code: str) -> RoomStatus:
        data = await self._request("GET", f"/api/rooms/{code}/status")
        return RoomStatus.model_validate(data)

    async def next_phase(self, code: str, phase: Optional[str] = None, round_number: Optional[int] = None) -> RoomInfo:
        payload = {}
        if phase is not None:
            payload["phase"] = phase
        if round_number is not None:
            payload["round"] = round_number
        data = await self._request("POST", f"/api/rooms/{code}/next", json=payload)
        return RoomInfo.model_validate(data)

    async def submit_response(self, room_id: int, player_id: int, question_id: int, answer: str) -> dict:
        return await self._request("POST", "/api/responses", json={
            "roomId": room_id,
            "playerId": player_id,
            "questionId": question_id,
            "answer": answer
        })

    async def compatibility(self, code: str) -> dict:
        return await self._request("GET", f"/api/rooms/{code}/compatibility")

    async def random_pick(self) -> dict:
        return await self._request("GET", "/api/picks/random")


class GameSession:
    """某位玩家视角下的房间"""

    def __init__(self, client: CoupleGameClient, code: str, player_id: int):
        self.client = client
        self.code = code.upper()
        self.player_id = player_id
        self.status: Optional[RoomStatus] = None

    @classmethod
    async def create(cls, client: CoupleGameClient, name: str, avatar: Optional[str] = None) -> "GameSession":
        data = await client.create_room(name, avatar)
        session = cls(client, data["roomCode"], data["playerId"])
        await session.refresh()
        return session

    @classmethod
    async def join(cls, client: CoupleGameClient, code: str, name: str, avatar: Optional[str] = None) -> "GameSession":
        data = await client.join_room(code, name, avatar)
        session = cls(client, code, data["playerId"])
        await session.refresh()
        return session

    async def refresh(self) -> RoomStatus:
        self.status = await self.client.status(self.code)
        return self.status

    async def poll(self, interval: Optional[float] = None, max_polls: Optional[int] = None) -> AsyncIterator[RoomStatus]:
        """定时拉取房间状态；失败时记录日志，等下一次轮询自动恢复"""
        interval = settings.POLL_INTERVAL_SECONDS if interval is None else interval
        polls = 0
        while max_polls is None or polls < max_polls:
            polls += 1
            try:
                yield await self.refresh()
            except httpx.HTTPError as e:
                logger.warning("轮询房间 %s 失败: %s", self.code, e)
            await asyncio.sleep(interval)

    @property
    def room(self) -> RoomInfo:
        if self.status is None:
            raise RuntimeError("尚未获取房间状态")
        return self.status.room

    @property
    def player_ids(self) -> List[int]:
        return sorted(p.id for p in self.status.players) if self.status else []

    @property
    def is_host(self) -> bool:
        return self.player_id == phase_controller.host_player_id(self.player_ids)

    def question_ids(self, category: Optional[str] = None) -> List[int]:
        category = category or self.room.phase
        return list(getattr(self.room, f"{category}_questions", None) or [])

    def current_question_id(self) -> Optional[int]:
        if self.room.phase not in {p.value for p in ROUND_PHASES}:
            return None
        return phase_controller.current_question_id(self.room.round, self.question_ids())

    def both_answered(self) -> bool:
        return phase_controller.both_answered(
            self.status.responses, self.current_question_id(), self.player_ids
        )

    def can_advance(self) -> bool:
        """房主在两人都作答后才能推进"""
        return phase_controller.can_advance(
            self.player_id, self.player_ids, self.status.responses, self.current_question_id()
        )

    async def _apply(self, state: phase_controller.PhaseState) -> RoomInfo:
        room = await self.client.next_phase(self.code, state.phase, state.round)
        await self.refresh()
        return room

    async def start(self) -> Optional[RoomInfo]:
        """大厅里两人到齐后开始"""
        if len(self.player_ids) < 2:
            return None
        return await self._apply(phase_controller.start_game())

    async def choose(self, activity: str) -> RoomInfo:
        return await self._apply(phase_controller.select_activity(activity))

    async def answer(self, answer: str) -> dict:
        question_id = self.current_question_id()
        if question_id is None:
            raise ValueError(f"阶段 {self.room.phase} 第{self.room.round}轮没有题目")
        response = await self.client.submit_response(self.room.id, self.player_id, question_id, answer)
        await self.refresh()
        return response

    async def complete_dare(self) -> Optional[RoomInfo]:
        """完成挑战后直接进入下一轮（挑战不需要两人作答）"""
        if self.room.phase != phase_controller.Phase.DARE.value:
            return None
        return await self._apply(phase_controller.advance(self.room.phase, self.room.round, self.question_ids()))

    async def advance(self) -> Optional[RoomInfo]:
        """房主推进到下一轮；最后一轮之后进入总结页"""
        if not self.can_advance():
            return None
        state = phase_controller.advance(self.room.phase, self.room.round, self.question_ids())
        return await self._apply(state)

    async def play_again(self) -> RoomInfo:
        return await self._apply(phase_controller.play_again())

    async def leave(self) -> RoomInfo:
        """返回主面板：只发送phase，round由服务端默认为0"""
        room = await self.client.next_phase(self.code, phase_controller.leave_activity().phase)
        await self.refresh()
        return room

    async def share_media(self, url: str) -> dict:
        """影音活动中写入房间共享的链接"""
        if self.room.phase not in {p.value for p in MEDIA_PHASES}:
            raise ValueError("只有影音活动可以共享链接")
        slot = MOVIE_URL_SLOT if self.room.phase == phase_controller.Phase.MOVIE_NIGHT.value else MUSIC_URL_SLOT
        response = await self.client.submit_response(self.room.id, self.player_id, slot, url)
        await self.refresh()
        return response

    def shared_media(self, slot: int) -> Optional[str]:
        for response in self.status.responses:
            if response.question_id == slot:
                return response.answer
        return None
