from __future__ import annotations

import logging

from fx_ledger.utils import logger as logger_module
from fx_ledger.utils.logger import get_logger


def test_get_logger_returns_named_loggers_and_configures_once(monkeypatch) -> None:
    calls: list[dict] = []
    monkeypatch.setattr(logger_module, "_CONFIGURED", False)
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))

    first = get_logger("fx_ledger.resolver")
    second = get_logger("fx_ledger.cache.stores")

    assert first.name == "fx_ledger.resolver"
    assert second.name == "fx_ledger.cache.stores"
    assert get_logger().name == "fx_ledger"
    assert len(calls) == 1
    assert logger_module._CONFIGURED is True
