"""
游戏状态查询服务
"""

from sqlalchemy.orm import Session
from couplegame.schemas.room_schemas import (
    CompatibilityReport, PlayerInfo, QuestionInfo, ResponseInfo, RoomInfo, RoomStatus
)
from couplegame.services import scoring
from couplegame.services.question_bank import QuestionBank
from couplegame.services.response_service import ResponseService
from couplegame.services.room_service import RoomService

class GameService:
    """聚合房间、玩家、题库和回答，供客户端轮询"""

    def __init__(self, db: Session):
        self.db = db
        self.rooms = RoomService(db)
        self.responses = ResponseService(db)
        self.question_bank = QuestionBank(db)

    async def get_room_status(self, code: str) -> RoomStatus:
        """房间状态：题目返回完整题库，由客户端按冻结列表过滤"""
        room = await self.rooms.require_by_code(code)
        players = await self.rooms.list_players(room.id)
        responses = await self.responses.list_by_room(room.id)
        questions = await self.question_bank.list_all()

        return RoomStatus(
            room=RoomInfo.model_validate(room),
            players=[PlayerInfo.model_validate(p) for p in players],
            questions=[QuestionInfo.model_validate(q) for q in questions],
            responses=[ResponseInfo.model_validate(r) for r in responses]
        )

    async def get_compatibility(self, code: str) -> CompatibilityReport:
        room = await self.rooms.require_by_code(code)
        responses = await self.responses.list_by_room(room.id)

        scores = scoring.room_compatibility(room, responses)
        overall = scoring.overall_score(scores.values())
        return CompatibilityReport(scores=scores, overall=overall, vibe=scoring.vibe(overall))
