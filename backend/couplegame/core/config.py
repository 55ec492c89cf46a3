"""
应用配置模块
"""

from typing import List
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """应用设置"""

    # 基础设置
    APP_NAME: str = "Couple Game"
    VERSION: str = "1.0.0"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    # 服务器设置
    HOST: str = "0.0.0.0"
    PORT: int = 8001
    CORS_ORIGINS: List[str] = ["http://localhost:3000"]

    # 数据库设置
    DATABASE_URL: str = "sqlite:///./couple_game.db"
    SEED_ON_STARTUP: bool = True

    # 房间设置
    ROOM_CODE_LENGTH: int = 4
    ROOM_CODE_ATTEMPTS: int = 5
    POLL_INTERVAL_SECONDS: float = 2.0  # 客户端轮询间隔（秒）

    # 每个房间冻结的题目数量
    QUIZ_QUESTION_COUNT: int = 10
    THIS_THAT_QUESTION_COUNT: int = 5
    LIKELY_QUESTION_COUNT: int = 5
    WOULD_YOU_RATHER_QUESTION_COUNT: int = 5
    DARE_ROUND_COUNT: int = 3

    # 服务端阶段校验（默认关闭，保持最后写入者胜出）
    ENFORCE_TRANSITIONS: bool = False

    class Config:
        env_file = ".env"
        case_sensitive = True

    def question_set_size(self, category: str) -> int:
        """返回某个类别冻结题目列表的长度"""
        sizes = {
            "quiz": self.QUIZ_QUESTION_COUNT,
            "this_that": self.THIS_THAT_QUESTION_COUNT,
            "likely": self.LIKELY_QUESTION_COUNT,
            "would_you_rather": self.WOULD_YOU_RATHER_QUESTION_COUNT,
            "dare": self.DARE_ROUND_COUNT,
        }
        return sizes[category]

# 全局设置实例
settings = Settings()
