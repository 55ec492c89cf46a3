"""
玩家数据模型
"""

from sqlalchemy import Column, Integer, String, ForeignKey, DateTime
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from couplegame.core.database import Base

class Player(Base):
    """玩家表：加入后不再修改"""
    __tablename__ = "players"

    id = Column(Integer, primary_key=True, index=True)
    room_id = Column(Integer, ForeignKey("rooms.id"), nullable=False, index=True)
    name = Column(String(50), nullable=False)
    avatar = Column(String(16), default="🙂")  # emoji头像
    score = Column(Integer, default=0)         # 暂未使用
    joined_at = Column(DateTime(timezone=True), server_default=func.now())

    # 关系
    room = relationship("Room", back_populates="players")
