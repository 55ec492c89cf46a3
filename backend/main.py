#!/usr/bin/env python3
"""
Couple Game - 后端主入口
"""

import logging
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from couplegame.core.config import settings
from couplegame.core.errors import register_exception_handlers
from couplegame.api import api_router
from couplegame.core.database import init_db, get_db

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    description="双人情侣派对游戏后端API（客户端轮询同步）",
    version=settings.VERSION
)

# CORS设置
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# 注册API路由
app.include_router(api_router, prefix="/api")

@app.on_event("startup")
async def startup_event():
    """应用启动时的初始化"""
    logger.info("🚀 启动 %s 后端服务...", settings.APP_NAME)
    await init_db()
    logger.info("✅ 数据库初始化完成")

    if settings.SEED_ON_STARTUP:
        from couplegame.services.question_bank import QuestionBank, SEED_QUESTIONS

        # 获取数据库会话
        db = next(get_db())
        try:
            await QuestionBank(db).seed(SEED_QUESTIONS)
        finally:
            db.close()

@app.get("/")
async def root():
    """根路径健康检查"""
    return {"message": f"{settings.APP_NAME} 后端运行中", "status": "healthy"}

@app.get("/health")
async def health_check():
    """健康检查端点"""
    return {"status": "healthy", "service": "couple-game"}

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level="info"
    )
