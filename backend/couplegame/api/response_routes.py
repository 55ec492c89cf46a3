"""
回答提交API路由
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from couplegame.core.database import get_db
from couplegame.services.response_service import ResponseService
from couplegame.schemas.room_schemas import ResponseCreate, ResponseInfo

router = APIRouter()

@router.post("", response_model=ResponseInfo, status_code=201)
async def submit_response(
    data: ResponseCreate,
    db: Session = Depends(get_db)
):
    """提交回答；负数题目ID写入房间级单值槽位"""
    response_service = ResponseService(db)
    return await response_service.submit(data)
