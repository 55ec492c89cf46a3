"""
API路由模块
"""

from fastapi import APIRouter
from .room_routes import router as room_router
from .response_routes import router as response_router
from .picks_routes import router as picks_router

# 创建主路由器
api_router = APIRouter()

# 注册各个功能模块的路由
api_router.include_router(room_router, prefix="/rooms", tags=["房间"])
api_router.include_router(response_router, prefix="/responses", tags=["回答"])
api_router.include_router(picks_router, prefix="/picks", tags=["随机挑选"])
