"""
题目数据模型
"""

from sqlalchemy import Column, Integer, String, Text, JSON
from couplegame.core.database import Base

class Question(Base):
    """题库表：所有房间共享，种子写入后只读"""
    __tablename__ = "questions"

    id = Column(Integer, primary_key=True, index=True)
    category = Column(String(30), nullable=False, index=True)  # quiz, this_that, likely, dare, would_you_rather
    text = Column(Text, nullable=False)
    options = Column(JSON, default=list)  # 选项列表，挑战类题目为空
