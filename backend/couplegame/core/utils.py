"""
工具函数模块
"""

import math
import random
import string
from typing import Optional
from datetime import datetime

ROOM_CODE_ALPHABET = string.ascii_uppercase + string.digits


def format_timestamp_with_timezone(timestamp: Optional[datetime]) -> Optional[str]:
    """格式化时间戳，确保包含UTC时区标识符"""
    if not timestamp:
        return None
    if timestamp.tzinfo is not None:
        return timestamp.isoformat()
    # 确保发送给前端的时间戳包含'Z'后缀，表示这是UTC时间
    return timestamp.isoformat() + 'Z'


def generate_room_code(length: int = 4, rng: Optional[random.Random] = None) -> str:
    """生成房间代码，字符取自[A-Z0-9]"""
    rng = rng or random
    return "".join(rng.choice(ROOM_CODE_ALPHABET) for _ in range(length))


def normalize_room_code(code: str) -> str:
    """房间代码大小写不敏感，统一转为大写"""
    return code.strip().upper()


def round_half_up(value: float) -> int:
    """四舍五入（.5向上取整，与浏览器端Math.round一致）"""
    return int(math.floor(value + 0.5))
