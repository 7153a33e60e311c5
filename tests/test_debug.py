"""诊断日志开关的测试用例。"""

from concurrent.futures import ThreadPoolExecutor

from apioutput.core.config import Settings
from apioutput.core.debug import DebugSwitch


def test_switch_defaults_off():
    switch = DebugSwitch()

    assert switch.enabled() is False
    assert not switch
    assert repr(switch) == "DebugSwitch(enabled=False)"


def test_switch_coerces_to_bool():
    switch = DebugSwitch()
    switch.set(1)

    assert switch.enabled() is True


def test_switch_survives_concurrent_toggling():
    switch = DebugSwitch()

    def toggle(i: int) -> bool:
        switch.set(i % 2 == 0)
        return switch.enabled()

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(toggle, range(200)))

    assert all(isinstance(value, bool) for value in results)
    switch.set(True)
    assert switch.enabled() is True


def test_output_debug_read_from_environment(monkeypatch):
    monkeypatch.setenv("OUTPUT_DEBUG", "true")

    assert Settings().output_debug is True


def test_output_debug_defaults_off(monkeypatch):
    monkeypatch.delenv("OUTPUT_DEBUG", raising=False)

    assert Settings().output_debug is False
