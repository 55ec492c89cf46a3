"""
随机挑选API路由
"""

from fastapi import APIRouter
from couplegame.schemas.room_schemas import Pick
from couplegame.services.picks import random_pick

router = APIRouter()

@router.get("/random", response_model=Pick)
async def get_random_pick():
    """随机返回一首歌/一句话/一个问题/一个约会点子"""
    return random_pick()
