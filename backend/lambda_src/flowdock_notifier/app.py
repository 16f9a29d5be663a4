from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional

from common import hydrate_env
from flowdock_notifier.models import (
    COMPLETION_MESSAGE,
    InvocationResult,
    JsonValue,
    NotifierProcessError,
    serialize_event,
)
from flowdock_notifier.process import NotifierProcess
from flowdock_notifier.settings import NotifierSettings

logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)

CompletionCallback = Callable[[Optional[NotifierProcessError], str], None]


class NotifierApplication:
    """Serializes the incoming event and hands it to the notifier executable."""

    def __init__(
        self,
        settings: NotifierSettings | None = None,
        process: NotifierProcess | None = None,
    ) -> None:
        self._settings = settings or NotifierSettings.from_env()
        self._process = process or NotifierProcess(working_directory=self._settings.working_directory)

    def handle(self, event: JsonValue) -> InvocationResult:
        logger.info("Hello from Python")
        payload = serialize_event(event)
        logger.info("Event: %s, stringified: %s", event, payload)
        hydrate_env(self._settings.token_env, self._settings.token_parameter)
        result = self._process.run(self._settings.command(payload))
        if result.succeeded:
            logger.info("Notifier finished with status %s", result.returncode)
        return result

    def handle_with_callback(self, event: JsonValue, callback: CompletionCallback) -> None:
        result = self.handle(event)
        callback(result.error, COMPLETION_MESSAGE)


_APPLICATION: NotifierApplication | None = None


def _get_application() -> NotifierApplication:
    global _APPLICATION
    if _APPLICATION is None:
        _APPLICATION = NotifierApplication()
    return _APPLICATION


def lambda_handler(event: JsonValue, _context: Any) -> Dict[str, Any]:
    result = _get_application().handle(event)
    if result.error is not None:
        raise result.error
    return result.to_payload()
