"""
回答存储服务
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Union
from sqlalchemy.orm import Session
from couplegame.models.response import Response
from couplegame.schemas.room_schemas import ResponseCreate

logger = logging.getLogger(__name__)

# 房间级单值槽位（负数题目ID）
MOVIE_URL_SLOT = -1
MUSIC_URL_SLOT = -2


@dataclass(frozen=True)
class PerPlayerAnswer:
    """普通题目：每次提交追加一行"""
    question_id: int


@dataclass(frozen=True)
class RoomSingleton:
    """房间共享的单值：同一房间只有一行，重复写入时原地更新"""
    slot_id: int


ResponseTarget = Union[PerPlayerAnswer, RoomSingleton]


def response_target(question_id: int) -> ResponseTarget:
    """按题目ID的符号区分写入目标"""
    if question_id < 0:
        return RoomSingleton(question_id)
    return PerPlayerAnswer(question_id)


class ResponseService:
    """回答存储：正数ID只追加，负数ID为房间级单值"""

    def __init__(self, db: Session):
        self.db = db

    async def submit(self, data: ResponseCreate) -> Response:
        target = response_target(data.question_id)
        if isinstance(target, RoomSingleton):
            return await self._write_singleton(data, target)
        return await self._append_answer(data, target)

    async def _append_answer(self, data: ResponseCreate, target: PerPlayerAnswer) -> Response:
        # 不去重：同一玩家重复提交会产生两行
        response = Response(
            room_id=data.room_id,
            player_id=data.player_id,
            question_id=target.question_id,
            answer=data.answer
        )
        self.db.add(response)
        self.db.commit()
        self.db.refresh(response)
        logger.debug("房间 %s 玩家 %s 回答题目 %s", data.room_id, data.player_id, target.question_id)
        return response

    async def _write_singleton(self, data: ResponseCreate, target: RoomSingleton) -> Response:
        # 按(房间, 槽位)查找，不区分玩家
        response = self.db.query(Response).filter(
            Response.room_id == data.room_id,
            Response.question_id == target.slot_id
        ).first()

        if response:
            response.answer = data.answer
            response.player_id = data.player_id
        else:
            response = Response(
                room_id=data.room_id,
                player_id=data.player_id,
                question_id=target.slot_id,
                answer=data.answer
            )
            self.db.add(response)

        self.db.commit()
        self.db.refresh(response)
        logger.info("房间 %s 更新槽位 %s", data.room_id, target.slot_id)
        return response

    async def list_by_room(self, room_id: int) -> List[Response]:
        return self.db.query(Response).filter(Response.room_id == room_id).order_by(Response.id).all()

    async def get_singleton(self, room_id: int, slot_id: int) -> Optional[str]:
        response = self.db.query(Response).filter(
            Response.room_id == room_id,
            Response.question_id == slot_id
        ).first()
        return response.answer if response else None
