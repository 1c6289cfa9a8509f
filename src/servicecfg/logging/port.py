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
"""LoggingPort — the logging contract, and the settings adapters read from properties.

Recognised properties::

    servicecfg.logging.level.root=INFO
    servicecfg.logging.level.<logger name>=DEBUG
    servicecfg.logging.format=console|json
    servicecfg.logging.cache-loggers=true
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

from servicecfg.core.accessor import TypedAccessor
from servicecfg.core.configuration import ServiceConfiguration
from servicecfg.core.group import PropertyGroup

LEVEL_PREFIX = "servicecfg.logging.level"
FORMAT_KEY = "servicecfg.logging.format"
CACHE_KEY = "servicecfg.logging.cache-loggers"


def _level_entries(configuration: TypedAccessor) -> dict[str, str | None]:
    if isinstance(configuration, ServiceConfiguration):
        return configuration.collect_prefixed(LEVEL_PREFIX).to_map()
    if isinstance(configuration, PropertyGroup):
        group = configuration.break_out(LEVEL_PREFIX)
        return group.to_map() if group is not None else {}
    return {"root": configuration.get_string(f"{LEVEL_PREFIX}.root")}


def to_level(level: str) -> int:
    """Map a level name to its stdlib value, falling back to INFO."""
    value = logging.getLevelName(level.upper())
    return value if isinstance(value, int) else logging.INFO


@dataclass
class LoggingSettings:
    """Logging options shared by every adapter."""

    root_level: str = "INFO"
    format: str = "console"
    module_levels: dict[str, str] = field(default_factory=dict)
    cache_loggers: bool = True

    @property
    def json_output(self) -> bool:
        return self.format == "json"

    @classmethod
    def from_configuration(cls, configuration: TypedAccessor) -> LoggingSettings:
        """Read settings from a ServiceConfiguration or any PropertyGroup holding full keys."""
        levels = _level_entries(configuration)
        root = levels.pop("root", None) or "INFO"
        return cls(
            root_level=root.upper(),
            format=(configuration.get_string(FORMAT_KEY, "console") or "console").lower(),
            module_levels={name: level.upper() for name, level in levels.items() if level},
            cache_loggers=bool(configuration.get_boolean(CACHE_KEY, True)),
        )

    def apply_levels(self, fmt: str) -> None:
        """Install a stdout root handler at the root level, then the per-logger levels."""
        logging.basicConfig(format=fmt, stream=sys.stdout, level=to_level(self.root_level), force=True)
        for name, level in self.module_levels.items():
            logging.getLogger(name).setLevel(to_level(level))


@runtime_checkable
class LoggingPort(Protocol):
    """Port defining the logging contract for servicecfg consumers."""

    def configure(self, configuration: TypedAccessor) -> None: ...
    def get_logger(self, name: str) -> Any: ...
    def set_level(self, name: str, level: str) -> None: ...
