"""
错误类型与FastAPI异常处理
"""

import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

class GameError(Exception):
    """业务错误基类"""
    status_code = 500
    message = "Internal server error"

    def __init__(self, message: str = None):
        super().__init__(message or self.message)
        self.message = message or self.message

class ValidationError(GameError):
    """请求字段缺失或格式错误"""
    status_code = 400
    message = "Invalid input"

class NotFoundError(GameError):
    """房间代码不存在"""
    status_code = 404
    message = "Room not found"

async def game_error_handler(request: Request, exc: GameError):
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

async def request_validation_handler(request: Request, exc: RequestValidationError):
    # 不返回字段级别的细节
    logger.debug("请求校验失败 %s: %s", request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={"message": ValidationError.message})

async def internal_error_handler(request: Request, exc: Exception):
    logger.exception("请求处理失败 %s", request.url.path)
    return JSONResponse(status_code=500, content={"message": GameError.message})

def register_exception_handlers(app: FastAPI):
    """注册统一的错误响应格式 {"message": ...}"""
    app.add_exception_handler(GameError, game_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, internal_error_handler)
