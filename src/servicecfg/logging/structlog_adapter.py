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
"""StructlogAdapter — default LoggingPort implementation using structlog."""

from __future__ import annotations

import logging
from typing import Any

import structlog

from servicecfg.core.accessor import TypedAccessor
from servicecfg.logging.port import LoggingSettings, to_level

_PROCESSORS: tuple[structlog.types.Processor, ...] = (
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
)


class StructlogAdapter:
    """Routes structlog events through stdlib logging, rendered per ``servicecfg.logging.format``."""

    def __init__(self, settings: LoggingSettings | None = None) -> None:
        self._settings = settings or LoggingSettings()

    @property
    def settings(self) -> LoggingSettings:
        return self._settings

    def configure(self, configuration: TypedAccessor) -> None:
        self.apply(LoggingSettings.from_configuration(configuration))

    def apply(self, settings: LoggingSettings) -> None:
        self._settings = settings
        renderer = structlog.processors.JSONRenderer() if settings.json_output else structlog.dev.ConsoleRenderer()
        structlog.configure(
            processors=[*_PROCESSORS, renderer],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=settings.cache_loggers,
        )
        settings.apply_levels("%(message)s")

    def get_logger(self, name: str) -> Any:
        return structlog.get_logger(name)

    def set_level(self, name: str, level: str) -> None:
        logging.getLogger(name).setLevel(to_level(level))
