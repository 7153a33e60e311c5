"""应用入口：创建挂载统一信封输出的 FastAPI 实例。"""

from fastapi import FastAPI
from fastapi.responses import Response

from apioutput.core.config import get_settings
from apioutput.core.handlers import register_exception_handlers
from apioutput.core.logger import logger, setup_logging
from apioutput.core.responses import success_response
from apioutput.middleware.request_id import RequestIdMiddleware
from apioutput.models.envelope import MSG_TYPE_DATA_FOUND

setup_logging()
settings = get_settings()


def create_app() -> FastAPI:
    """组装应用：请求 ID 中间件、异常处理器与健康检查接口。"""
    application = FastAPI(title=settings.project_name, debug=settings.debug)
    application.add_middleware(RequestIdMiddleware)
    register_exception_handlers(application)

    @application.get("/health")
    async def health_check() -> Response:
        """提供健康检查接口，便于编排器与监控系统探活。"""
        return success_response(MSG_TYPE_DATA_FOUND, {"status": "healthy"})

    return application


app = create_app()


@app.on_event("startup")
async def startup_event() -> None:
    logger.info("SUCCESS - Application running at http://127.0.0.1:%s", settings.app_port)
