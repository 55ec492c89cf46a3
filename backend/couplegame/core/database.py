"""
数据库配置
"""
import logging
from sqlalchemy import create_engine, text
from sqlalchemy.orm import declarative_base, sessionmaker
from couplegame.core.config import settings

logger = logging.getLogger(__name__)

DATABASE_URL = settings.DATABASE_URL

engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {},
    echo=False  # 设置为True可以看到SQL查询日志
)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

# 后续版本新增到rooms表的列：列名 -> 列定义
ROOM_COLUMN_MIGRATIONS = {
    "would_you_rather_questions": "JSON",
    "dare_questions": "JSON",
    "version": "INTEGER NOT NULL DEFAULT 0",
}

def get_db():
    """获取数据库会话"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

async def init_db(bind=None):
    """初始化数据库"""
    bind = bind or engine

    # 导入所有模型
    from couplegame.models.room import Room
    from couplegame.models.player import Player
    from couplegame.models.question import Question
    from couplegame.models.response import Response

    # 创建所有表
    Base.metadata.create_all(bind=bind)

    # 执行数据库迁移
    await _migrate_database(bind)

    logger.info("数据库初始化完成")

async def _migrate_database(bind):
    """为旧的SQLite数据库补齐rooms表新增的列"""
    if bind.dialect.name != "sqlite":
        return

    with bind.connect() as conn:
        result = conn.execute(text("PRAGMA table_info(rooms)"))
        columns = [row[1] for row in result.fetchall()]

        for column, ddl in ROOM_COLUMN_MIGRATIONS.items():
            if column in columns:
                continue
            logger.info("执行数据库迁移：添加rooms.%s字段", column)
            conn.execute(text(f"ALTER TABLE rooms ADD COLUMN {column} {ddl}"))
            conn.commit()
