from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Union

COMPLETION_MESSAGE = "Process complete!"

_LONE_SURROGATE = re.compile("[\ud800-\udfff]")

JsonValue = Union[None, bool, int, float, str, List[Any], Dict[str, Any]]


class NotifierProcessError(RuntimeError):
    """Raised when the notifier could not be spawned or exited with a non-zero status."""

    def __init__(self, message: str, command: Sequence[str], returncode: Optional[int] = None) -> None:
        super().__init__(message)
        self.command = list(command)
        self.returncode = returncode


@dataclass
class InvocationResult:
    returncode: Optional[int]
    stdout: List[str] = field(default_factory=list)
    stderr: List[str] = field(default_factory=list)
    error: Optional[NotifierProcessError] = None
    message: str = COMPLETION_MESSAGE

    @property
    def succeeded(self) -> bool:
        return self.error is None

    def to_payload(self) -> Dict[str, Any]:
        return {"message": self.message, "returncode": self.returncode}


def serialize_event(event: JsonValue) -> str:
    """Encode the event as compact JSON, the same text JSON.stringify produces."""
    text = json.dumps(event, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
    # Unpaired surrogates cannot be encoded as UTF-8 argv bytes.
    return _LONE_SURROGATE.sub(lambda match: "\\u%04x" % ord(match.group()), text)
