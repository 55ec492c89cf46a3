# 业务逻辑服务包
from .game_service import GameService
from .question_bank import QuestionBank
from .response_service import ResponseService
from .room_service import RoomService

__all__ = ["GameService", "QuestionBank", "ResponseService", "RoomService"]
