"""
回答数据模型
"""

from sqlalchemy import Column, Integer, ForeignKey, Text
from sqlalchemy.orm import relationship
from couplegame.core.database import Base

class Response(Base):
    """回答表

    question_id为正数时每次提交追加一行；为负数时表示房间级单值槽位
    （例如共享的影片链接），同一房间只保留一行并原地更新。
    """
    __tablename__ = "responses"

    id = Column(Integer, primary_key=True, index=True)
    room_id = Column(Integer, ForeignKey("rooms.id"), nullable=False, index=True)
    player_id = Column(Integer, ForeignKey("players.id"), nullable=False)
    question_id = Column(Integer, nullable=False, index=True)  # 不设外键：负数ID不对应题目
    answer = Column(Text, nullable=False)

    # 关系
    room = relationship("Room")
    player = relationship("Player")
