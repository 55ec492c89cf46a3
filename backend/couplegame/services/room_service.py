"""
房间状态服务
"""

import logging
import random
from datetime import datetime
from typing import List, Optional, Tuple
from sqlalchemy.orm import Session
from couplegame.core.config import settings
from couplegame.core.errors import NotFoundError, ValidationError
from couplegame.core.utils import generate_room_code, normalize_room_code
from couplegame.models.player import Player
from couplegame.models.room import Room
from couplegame.schemas.room_schemas import NextPhaseRequest, RoomCreate, RoomJoin
from couplegame.services import phase_controller
from couplegame.services.phase_controller import Phase, ROUND_PHASES
from couplegame.services.question_bank import QuestionBank

logger = logging.getLogger(__name__)

DEFAULT_AVATAR = "🙂"


class RoomService:
    """房间状态：阶段、轮次和每个类别冻结的题目列表"""

    def __init__(self, db: Session, rng: Optional[random.Random] = None):
        self.db = db
        self.rng = rng or random.Random()
        self.question_bank = QuestionBank(db)

    async def create(self, code: str) -> Room:
        """新建房间：phase=lobby, round=0，题目列表为空"""
        room = Room(
            code=normalize_room_code(code),
            phase=Phase.LOBBY.value,
            round=0,
            quiz_questions=[],
            this_that_questions=[],
            likely_questions=[],
            would_you_rather_questions=[],
            dare_questions=[],
        )
        self.db.add(room)
        self.db.commit()
        self.db.refresh(room)
        logger.info("创建房间 %s (id=%s)", room.code, room.id)
        return room

    async def get_by_code(self, code: str) -> Optional[Room]:
        return self.db.query(Room).filter(Room.code == normalize_room_code(code)).first()

    async def get_by_id(self, room_id: int) -> Optional[Room]:
        return self.db.query(Room).filter(Room.id == room_id).first()

    async def require_by_code(self, code: str) -> Room:
        room = await self.get_by_code(code)
        if not room:
            raise NotFoundError()
        return room

    async def _require_by_id(self, room_id: int) -> Room:
        room = await self.get_by_id(room_id)
        if not room:
            raise NotFoundError()
        return room

    async def generate_unique_code(self) -> str:
        """生成未被占用的房间代码（单次检查后插入，极小概率冲突可接受）"""
        code = generate_room_code(settings.ROOM_CODE_LENGTH, self.rng)
        for _ in range(settings.ROOM_CODE_ATTEMPTS - 1):
            if not await self.get_by_code(code):
                break
            code = generate_room_code(settings.ROOM_CODE_LENGTH, self.rng)
        return code

    async def create_room(self, data: RoomCreate) -> Tuple[Room, Player]:
        """创建房间并让创建者成为房主"""
        room = await self.create(await self.generate_unique_code())
        if data.met_date:
            room.met_date = data.met_date
            self.db.commit()

        for phase in ROUND_PHASES:
            await self.assign_question_set(room.id, phase.value)

        host = await self.add_player(room.id, data.name, data.avatar)
        return room, host

    async def join_room(self, data: RoomJoin) -> Tuple[Room, Player]:
        room = await self.require_by_code(data.code)
        player = await self.add_player(room.id, data.name, data.avatar)
        return room, player

    async def add_player(self, room_id: int, name: str, avatar: Optional[str] = None) -> Player:
        player = Player(room_id=room_id, name=name, avatar=avatar or DEFAULT_AVATAR)
        self.db.add(player)
        self.db.commit()
        self.db.refresh(player)

        count = self.db.query(Player).filter(Player.room_id == room_id).count()
        if count > 2:
            logger.warning("房间 %s 已有 %d 名玩家，游戏只支持两人", room_id, count)
        logger.info("玩家 %s (id=%s) 加入房间 %s", name, player.id, room_id)
        return player

    async def list_players(self, room_id: int) -> List[Player]:
        return self.db.query(Player).filter(Player.room_id == room_id).order_by(Player.id).all()

    async def assign_question_set(self, room_id: int, category: str, ids: Optional[List[int]] = None) -> List[int]:
        """为房间冻结某个类别的题目列表

        未指定ids时从题库中无放回随机抽取（数量由配置决定）并打乱顺序。
        已经分配过（非空）的列表不会再改变，直接返回原列表。
        """
        if category not in Room.QUESTION_SET_COLUMNS:
            raise ValidationError(f"Unknown category: {category}")

        room = await self._require_by_id(room_id)
        existing = room.question_ids(category)
        if existing:
            return existing

        if ids is None:
            pool = await self.question_bank.list_ids_by_category(category)
            size = min(settings.question_set_size(category), len(pool))
            ids = self.rng.sample(pool, size)
        else:
            ids = list(ids)

        if not ids:
            logger.warning("房间 %s 的类别 %s 没有可用题目", room.code, category)
            return []

        # 整体赋值新列表，JSON列才能被识别为已修改
        setattr(room, Room.QUESTION_SET_COLUMNS[category], ids)
        self.db.commit()
        logger.info("房间 %s 冻结 %s 题目: %s", room.code, category, ids)
        return ids

    async def advance_phase(self, room_id: int, phase: str, round_number: int) -> Room:
        """无条件写入(phase, round)，合法性由调用方负责"""
        room = await self._require_by_id(room_id)
        room.phase = phase
        room.round = round_number
        room.version = (room.version or 0) + 1
        self.db.commit()
        self.db.refresh(room)
        logger.info("房间 %s 切换到 %s 第%d轮 (version=%d)", room.code, phase, round_number, room.version)
        return room

    async def next_phase(self, code: str, request: NextPhaseRequest) -> Room:
        """处理客户端的阶段切换请求

        默认原样写入（最后写入者胜出）；开启 ENFORCE_TRANSITIONS 后
        会校验迁移表和 expectedVersion。
        """
        room = await self.require_by_code(code)
        phase = request.phase if request.phase is not None else phase_controller.DEFAULT_PHASE
        round_number = request.round if request.round is not None else phase_controller.DEFAULT_ROUND

        if settings.ENFORCE_TRANSITIONS:
            if not phase_controller.is_legal_transition(room.phase, phase):
                logger.warning("房间 %s 拒绝迁移 %s -> %s", room.code, room.phase, phase)
                raise ValidationError(f"Illegal transition {room.phase} -> {phase}")
            if request.expected_version is not None and request.expected_version != room.version:
                logger.warning("房间 %s 版本冲突: 期望 %s，当前 %s", room.code, request.expected_version, room.version)
                raise ValidationError("Room was updated by another player")

        # 首次进入某个活动时补齐尚未分配的题目列表
        if phase in Room.QUESTION_SET_COLUMNS and not room.question_ids(phase):
            await self.assign_question_set(room.id, phase)

        return await self.advance_phase(room.id, phase, round_number)

    async def set_met_date(self, room_id: int, met_date: datetime) -> Room:
        room = await self._require_by_id(room_id)
        room.met_date = met_date
        self.db.commit()
        self.db.refresh(room)
        return room
