"""
房间相关的数据模式（JSON字段使用camelCase，与前端保持一致）
"""

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator
from pydantic.alias_generators import to_camel
from typing import Optional, List, Dict
from datetime import datetime
from couplegame.core.utils import format_timestamp_with_timezone

class CamelModel(BaseModel):
    """camelCase别名基类"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

class RoomCreate(CamelModel):
    """创建房间的请求模式"""
    name: str = Field(..., min_length=1, description="创建者昵称")
    avatar: Optional[str] = Field(default=None, description="emoji头像")
    met_date: Optional[datetime] = Field(default=None, description="在一起的日期")

class RoomJoin(CamelModel):
    """加入房间的请求模式"""
    code: str = Field(..., min_length=4, max_length=4, description="房间代码")
    name: str = Field(..., min_length=1)
    avatar: Optional[str] = None

class RoomCreated(CamelModel):
    room_code: str
    player_id: int
    room_id: int

class RoomJoined(CamelModel):
    player_id: int
    room_id: int

class NextPhaseRequest(CamelModel):
    """阶段切换请求：缺省时回到dashboard、round=0"""
    phase: Optional[str] = Field(default=None, min_length=1)
    round: Optional[int] = Field(default=None, ge=0)
    expected_version: Optional[int] = Field(default=None, description="仅在严格模式下校验")

class MetDateUpdate(CamelModel):
    met_date: datetime

class RoomInfo(CamelModel):
    """房间信息"""
    id: int
    code: str
    phase: str
    round: int
    version: int = 0
    met_date: Optional[datetime] = None
    created_at: Optional[datetime] = None
    quiz_questions: List[int] = Field(default_factory=list)
    this_that_questions: List[int] = Field(default_factory=list)
    likely_questions: List[int] = Field(default_factory=list)
    would_you_rather_questions: List[int] = Field(default_factory=list)
    dare_questions: List[int] = Field(default_factory=list)

    @field_serializer('met_date', 'created_at')
    def serialize_dt(self, dt: Optional[datetime]) -> Optional[str]:
        return format_timestamp_with_timezone(dt)

    @field_validator('quiz_questions', 'this_that_questions', 'likely_questions',
                     'would_you_rather_questions', 'dare_questions', mode='before')
    @classmethod
    def default_question_ids(cls, value):
        # 迁移前创建的房间这些列为NULL
        return value or []

class PlayerInfo(CamelModel):
    """玩家信息"""
    id: int
    room_id: int
    name: str
    avatar: Optional[str] = None
    score: Optional[int] = 0
    joined_at: Optional[datetime] = None

    @field_serializer('joined_at')
    def serialize_dt(self, dt: Optional[datetime]) -> Optional[str]:
        return format_timestamp_with_timezone(dt)

class QuestionInfo(CamelModel):
    id: int
    category: str
    text: str
    options: List[str] = Field(default_factory=list)

    @field_validator('options', mode='before')
    @classmethod
    def default_options(cls, value):
        return value or []

class ResponseCreate(CamelModel):
    """提交回答的请求模式"""
    room_id: int
    player_id: int
    question_id: int
    answer: str

class ResponseInfo(CamelModel):
    id: int
    room_id: int
    player_id: int
    question_id: int
    answer: str

class RoomStatus(CamelModel):
    """房间状态（客户端每2秒轮询一次）"""
    room: RoomInfo
    players: List[PlayerInfo]
    questions: List[QuestionInfo]  # 完整题库，由客户端按冻结列表过滤
    responses: List[ResponseInfo]

class CompatibilityReport(CamelModel):
    """契合度统计"""
    scores: Dict[str, Optional[int]]
    overall: int
    vibe: str

class Pick(CamelModel):
    type: str
    content: str
