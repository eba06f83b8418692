from __future__ import annotations

import pytest

from adsbexporter.__main__ import _log_level, _parse_args, main


def test_parse_args() -> None:
    args = _parse_args(["--stats-path", "s.json", "--interval", "3", "-v"])
    assert args.stats_path == "s.json"
    assert args.aircrafts_path is None
    assert args.interval == "3"
    assert args.verbose


def test_log_level_from_env(monkeypatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "warning")
    assert _log_level(False) == 30
    assert _log_level(True) == 10
    monkeypatch.setenv("LOG_LEVEL", "chatty")
    assert _log_level(False) == 20


@pytest.mark.parametrize("addr", ["nowhere", ":99999"])
def test_invalid_listen_addr_exits_with_error(monkeypatch, addr) -> None:
    monkeypatch.delenv("LISTEN_ADDR", raising=False)
    assert main(["--listen-addr", addr]) == 2
