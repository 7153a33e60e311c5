"""日志配置模块：输出层的诊断日志统一走 ``apioutput`` 日志器。

诊断记录通过 ``extra`` 携带操作名、底层错误、用户提示等字段，JSON 格式下逐项输出；
时间一律使用 UTC，与信封中的 ``Datetime`` 保持一致。
"""

import json
import logging
import logging.config
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Optional

from .config import get_settings

# 诊断日志通过 ``extra`` 携带的结构化字段。
DIAGNOSTIC_FIELDS = ("operation", "error", "user_message", "record_id", "response_code", "msg_type")

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class ColorFormatter(logging.Formatter):
    """按级别着色的文本格式化器，时间戳渲染为 UTC 毫秒精度。"""

    RESET = "\033[0m"
    COLORS = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[41m",
    }

    def __init__(
        self,
        fmt: str = LOG_FORMAT,
        datefmt: Optional[str] = None,
        style: str = "%",
        use_colors: Optional[bool] = None,
    ) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt, style=style)
        if use_colors is None:
            use_colors = sys.stderr.isatty()
        self.use_colors = use_colors

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:  # noqa: D401
        dt = datetime.fromtimestamp(record.created, timezone.utc)
        if datefmt:
            return dt.strftime(datefmt)
        # e.g. 2026-10-18 09:30:12.045+00:00
        return dt.isoformat(sep=" ", timespec="milliseconds")

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        color = self.COLORS.get(record.levelno) if self.use_colors else None
        return f"{color}{message}{self.RESET}" if color else message


class JsonFormatter(ColorFormatter):
    """每条记录输出一行 JSON，附带请求 ID 与诊断字段。"""

    def __init__(self, *args, **kwargs) -> None:
        kwargs["use_colors"] = False
        super().__init__(*args, **kwargs)

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": self.formatTime(record),
            "logger": record.name,
            "level": record.levelname,
            "msg": record.getMessage(),
            "request_id": getattr(record, "request_id", None),
        }
        for field in DIAGNOSTIC_FIELDS:
            if hasattr(record, field):
                payload[field] = getattr(record, field)
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


_request_id_ctx: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


class RequestIdFilter(logging.Filter):
    """把当前请求的 ID 写入每条日志记录。"""

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: D401
        record.request_id = _request_id_ctx.get()
        return True


def build_logging_config() -> dict:
    """根据当前配置生成 ``dictConfig`` 所需的字典：控制台与按天滚动的日志文件。"""
    settings = get_settings()
    json_enabled = bool(settings.log_json)
    handlers = ["console", "file"]

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "console": {"()": "apioutput.core.logger.ColorFormatter"},
            "file": {"()": "apioutput.core.logger.ColorFormatter", "use_colors": False},
            "json": {"()": "apioutput.core.logger.JsonFormatter"},
        },
        "filters": {
            "request_id": {"()": "apioutput.core.logger.RequestIdFilter"},
        },
        "handlers": {
            "console": {
                "level": settings.log_level,
                "class": "logging.StreamHandler",
                "formatter": "json" if json_enabled else "console",
                "filters": ["request_id"],
            },
            "file": {
                "level": settings.log_level,
                "class": "logging.handlers.TimedRotatingFileHandler",
                "formatter": "json" if json_enabled else "file",
                "filename": str(settings.log_file_path),
                "when": "midnight",
                "backupCount": 14,
                "encoding": "utf-8",
                "delay": True,
                "filters": ["request_id"],
            },
        },
        "loggers": {
            "apioutput": {
                "handlers": handlers,
                "level": settings.log_level,
                "propagate": False,
            },
        },
        "root": {
            "handlers": handlers,
            "level": settings.log_level,
        },
    }


def setup_logging() -> None:
    """创建日志目录并应用日志配置。"""
    get_settings().log_directory.mkdir(parents=True, exist_ok=True)
    logging.config.dictConfig(build_logging_config())


logger = logging.getLogger("apioutput")


def set_request_id(request_id: Optional[str]) -> None:
    _request_id_ctx.set(request_id)


def get_request_id() -> Optional[str]:
    return _request_id_ctx.get()
