from __future__ import annotations

import logging
import subprocess
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import IO, Callable, List, Sequence

from flowdock_notifier.models import InvocationResult, NotifierProcessError

logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)


@dataclass
class NotifierProcess:
    """Runs the notifier executable and relays its output streams to the logger."""

    working_directory: Path | None = None

    def run(self, command: Sequence[str]) -> InvocationResult:
        try:
            child = subprocess.Popen(
                list(command),
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                cwd=str(self.working_directory) if self.working_directory else None,
            )
        except OSError as exc:
            logger.exception("Unable to start notifier %s", command[0])
            error = NotifierProcessError(f"Failed to start {command[0]}: {exc}", command)
            return InvocationResult(returncode=None, error=error)

        stdout_lines: List[str] = []
        stderr_lines: List[str] = []
        readers = [
            threading.Thread(target=_relay, args=(child.stdout, logger.info, stdout_lines), daemon=True),
            threading.Thread(target=_relay, args=(child.stderr, logger.error, stderr_lines), daemon=True),
        ]
        for reader in readers:
            reader.start()
        returncode = child.wait()
        for reader in readers:
            reader.join()

        error = None
        if returncode != 0:
            logger.error("Notifier %s exited with status %s", command[0], returncode)
            error = NotifierProcessError(
                f"Command failed with exit code {returncode}: {command[0]}",
                command,
                returncode=returncode,
            )
        return InvocationResult(returncode=returncode, stdout=stdout_lines, stderr=stderr_lines, error=error)


def _relay(stream: IO[bytes], sink: Callable[..., None], captured: List[str]) -> None:
    with stream:
        for raw_line in iter(stream.readline, b""):
            line = raw_line.removesuffix(b"\n").removesuffix(b"\r").decode("utf-8", errors="replace")
            captured.append(line)
            sink("%s", line)
