from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

DEFAULT_EXECUTABLE = "./flowdock-notifier"


@dataclass(frozen=True)
class NotifierSettings:
    executable: str = DEFAULT_EXECUTABLE
    working_directory: Path | None = None
    token_parameter: Optional[str] = None
    token_env: str = "FLOWDOCK_TOKEN"

    @classmethod
    def from_env(cls) -> "NotifierSettings":
        return cls(
            executable=os.environ.get("NOTIFIER_EXECUTABLE", DEFAULT_EXECUTABLE),
            working_directory=Path(os.environ["NOTIFIER_WORKING_DIRECTORY"])
            if os.environ.get("NOTIFIER_WORKING_DIRECTORY")
            else None,
            token_parameter=os.environ.get("FLOWDOCK_TOKEN_PARAMETER") or None,
            token_env=os.environ.get("FLOWDOCK_TOKEN_ENV", "FLOWDOCK_TOKEN"),
        )

    def command(self, payload: str) -> list[str]:
        return [self.executable, payload]
