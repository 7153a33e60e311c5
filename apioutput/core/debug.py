"""诊断日志开关：进程级布尔开关，读写均受锁保护，可在任意线程中切换。"""

from __future__ import annotations

import threading

from .config import get_settings


class DebugSwitch:
    """线程安全的布尔开关，决定错误路径是否额外输出诊断日志。"""

    def __init__(self, enabled: bool = False) -> None:
        self._enabled = enabled
        self._lock = threading.Lock()

    def set(self, enabled: bool) -> None:
        with self._lock:
            self._enabled = bool(enabled)

    def enabled(self) -> bool:
        with self._lock:
            return self._enabled

    def __bool__(self) -> bool:
        return self.enabled()

    def __repr__(self) -> str:
        return f"DebugSwitch(enabled={self.enabled()!r})"


# 默认开关的初始值来自 ``OUTPUT_DEBUG``，未配置时保持关闭。
debug_switch = DebugSwitch(get_settings().output_debug)


def set_debug(enabled: bool) -> None:
    """开启或关闭默认开关上的诊断日志。"""
    debug_switch.set(enabled)


def is_debug() -> bool:
    return debug_switch.enabled()
