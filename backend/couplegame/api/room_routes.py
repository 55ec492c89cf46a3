"""
房间管理API路由
"""

import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from couplegame.core.database import get_db
from couplegame.services.game_service import GameService
from couplegame.services.room_service import RoomService
from couplegame.schemas.room_schemas import (
    CompatibilityReport, MetDateUpdate, NextPhaseRequest, RoomCreate, RoomCreated,
    RoomInfo, RoomJoin, RoomJoined, RoomStatus
)

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post("", response_model=RoomCreated, status_code=201)
async def create_room(
    room_data: RoomCreate,
    db: Session = Depends(get_db)
):
    """创建房间，创建者成为房主"""
    room_service = RoomService(db)
    room, host = await room_service.create_room(room_data)
    return RoomCreated(room_code=room.code, player_id=host.id, room_id=room.id)

@router.post("/join", response_model=RoomJoined)
async def join_room(
    join_data: RoomJoin,
    db: Session = Depends(get_db)
):
    """通过房间代码加入"""
    room_service = RoomService(db)
    room, player = await room_service.join_room(join_data)
    return RoomJoined(player_id=player.id, room_id=room.id)

@router.get("/{code}/status", response_model=RoomStatus)
async def get_room_status(
    code: str,
    db: Session = Depends(get_db)
):
    """获取房间状态（客户端轮询）"""
    game_service = GameService(db)
    return await game_service.get_room_status(code)

@router.post("/{code}/next", response_model=RoomInfo)
async def next_phase(
    code: str,
    request: NextPhaseRequest = NextPhaseRequest(),
    db: Session = Depends(get_db)
):
    """切换阶段/轮次，任意玩家都可以调用"""
    room_service = RoomService(db)
    return await room_service.next_phase(code, request)

@router.post("/{code}/met-date", response_model=RoomInfo)
async def set_met_date(
    code: str,
    data: MetDateUpdate,
    db: Session = Depends(get_db)
):
    """设置在一起的日期"""
    room_service = RoomService(db)
    room = await room_service.require_by_code(code)
    return await room_service.set_met_date(room.id, data.met_date)

@router.get("/{code}/compatibility", response_model=CompatibilityReport)
async def get_compatibility(
    code: str,
    db: Session = Depends(get_db)
):
    """获取契合度统计"""
    game_service = GameService(db)
    return await game_service.get_compatibility(code)
