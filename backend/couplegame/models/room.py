"""
房间数据模型
"""

from sqlalchemy import Column, Integer, String, DateTime, JSON
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from couplegame.core.database import Base

class Room(Base):
    """房间表：一局双人游戏的阶段/轮次游标"""
    __tablename__ = "rooms"

    id = Column(Integer, primary_key=True, index=True)
    code = Column(String(8), nullable=False, unique=True, index=True)
    phase = Column(String(30), nullable=False, default="lobby")  # lobby, dashboard, quiz, this_that, likely, dare, would_you_rather, movie_night, music_together, summary
    round = Column(Integer, nullable=False, default=0)
    met_date = Column(DateTime(timezone=True), nullable=True)     # 仅用于展示“在一起的天数”
    version = Column(Integer, nullable=False, default=0)         # 每次阶段写入递增

    # 为本房间冻结的题目ID列表（JSON数组，分配后不再改变）
    quiz_questions = Column(JSON, default=list)
    this_that_questions = Column(JSON, default=list)
    likely_questions = Column(JSON, default=list)
    would_you_rather_questions = Column(JSON, default=list)
    dare_questions = Column(JSON, default=list)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # 关系
    players = relationship("Player", back_populates="room", order_by="Player.id")

    # 类别 -> 冻结列表所在的列名
    QUESTION_SET_COLUMNS = {
        "quiz": "quiz_questions",
        "this_that": "this_that_questions",
        "likely": "likely_questions",
        "would_you_rather": "would_you_rather_questions",
        "dare": "dare_questions",
    }

    def question_ids(self, category: str) -> list:
        """返回某个类别的冻结题目ID列表（未分配时为空列表）"""
        column = self.QUESTION_SET_COLUMNS.get(category)
        if column is None:
            return []
        return list(getattr(self, column) or [])
