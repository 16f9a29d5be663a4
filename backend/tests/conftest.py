from __future__ import annotations

import stat
from pathlib import Path
from typing import Callable

import pytest


@pytest.fixture
def fake_notifier(tmp_path: Path) -> Callable[[str], Path]:
    """Write an executable shell script that stands in for flowdock-notifier."""

    def _write(body: str, name: str = "flowdock-notifier") -> Path:
        script = tmp_path / name
        script.write_text("#!/bin/sh\n" + body, encoding="utf-8")
        script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return script

    return _write


@pytest.fixture(autouse=True)
def _clean_notifier_env(monkeypatch) -> None:
    for name in (
        "NOTIFIER_EXECUTABLE",
        "NOTIFIER_WORKING_DIRECTORY",
        "FLOWDOCK_TOKEN_PARAMETER",
        "FLOWDOCK_TOKEN_ENV",
        "FLOWDOCK_TOKEN",
    ):
        # setenv first so teardown also removes values written straight to os.environ
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
