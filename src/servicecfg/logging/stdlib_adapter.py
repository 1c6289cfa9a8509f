# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""StdlibLoggingAdapter — LoggingPort for services that log through stdlib only."""

from __future__ import annotations

import logging
from collections.abc import MutableMapping
from typing import Any

from servicecfg.core.accessor import TypedAccessor
from servicecfg.logging.port import LoggingSettings, to_level

_CONSOLE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
_JSON_FORMAT = '{"timestamp":"%(asctime)s","level":"%(levelname)s","logger":"%(name)s","message":"%(message)s"}'

# Keyword arguments stdlib logging understands itself.
_RESERVED = frozenset({"exc_info", "stack_info", "stacklevel", "extra"})


class KeyValueLoggerAdapter(logging.LoggerAdapter):
    """Accepts ``logger.warning(event, key=value)`` calls and renders ``event | key=value``."""

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> tuple[Any, MutableMapping[str, Any]]:
        context = {key: kwargs.pop(key) for key in list(kwargs) if key not in _RESERVED}
        if context:
            msg = f"{msg} | " + " ".join(f"{key}={value}" for key, value in context.items())
        return msg, kwargs


class StdlibLoggingAdapter:
    """LoggingPort using only stdlib logging."""

    def __init__(self, settings: LoggingSettings | None = None) -> None:
        self._settings = settings or LoggingSettings()

    @property
    def settings(self) -> LoggingSettings:
        return self._settings

    def configure(self, configuration: TypedAccessor) -> None:
        self.apply(LoggingSettings.from_configuration(configuration))

    def apply(self, settings: LoggingSettings) -> None:
        self._settings = settings
        settings.apply_levels(_JSON_FORMAT if settings.json_output else _CONSOLE_FORMAT)

    def get_logger(self, name: str) -> KeyValueLoggerAdapter:
        return KeyValueLoggerAdapter(logging.getLogger(name))

    def set_level(self, name: str, level: str) -> None:
        logging.getLogger(name).setLevel(to_level(level))
