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
"""ServiceConfiguration — typed access and prefix grouping over a layered environment.

Single-key lookups are delegated to the environment. Prefix collection
works on a merged view of every layer, where a key seen in an earlier
layer shadows the same key in any later layer.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

import structlog

from servicecfg.context.environment import CompositePropertySource, EnumerablePropertySource, PropertySource
from servicecfg.core.accessor import TypedAccessor
from servicecfg.core.group import PropertyGroup

logger = structlog.get_logger("servicecfg.core.configuration")


@runtime_checkable
class PropertyEnvironment(Protocol):
    """The layered property store a ServiceConfiguration reads from."""

    @property
    def property_sources(self) -> list[PropertySource]: ...
    def get_property(self, name: str) -> Any: ...
    def contains_property(self, name: str) -> bool: ...


def convert_value_to_string(value: Any) -> str | None:
    """Render a raw property value as text.

    Booleans render as ``true``/``false``. Unknown types fall back to
    ``str()`` with a warning; a value that cannot be rendered at all yields
    None.
    """
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    logger.warning("unknown_property_type", type=type(value).__name__)
    try:
        return str(value)
    except Exception:
        logger.error("property_conversion_failed", type=type(value).__name__, exc_info=True)
        return None


class ServiceConfiguration(TypedAccessor):
    """Service-facing configuration object backed by a layered environment."""

    def __init__(self, environment: PropertyEnvironment) -> None:
        self._environment = environment
        logger.info("service_configuration_created")

    @property
    def environment(self) -> PropertyEnvironment:
        return self._environment

    def get_property_value(self, name: str) -> str | None:
        return convert_value_to_string(self._environment.get_property(name))

    def contains(self, name: str) -> bool:
        return self._environment.contains_property(name)

    def contains_value(self, name: str) -> bool:
        return self._environment.get_property(name) is not None

    def collect_prefixed(self, path: str) -> PropertyGroup:
        """Collect every property under *path* into a group rooted at *path*.

        The ``path.`` prefix is stripped from the collected keys.
        """
        prefix = path if path.endswith(".") else path + "."
        entries = {
            key[len(prefix) :]: value for key, value in self._all_properties().items() if key.startswith(prefix)
        }
        return PropertyGroup(prefix[:-1], entries)

    def collect_all(self) -> PropertyGroup:
        """Return every property in one group with an empty path."""
        return PropertyGroup("", self._all_properties())

    def _all_properties(self) -> dict[str, str | None]:
        result: dict[str, str | None] = {}
        for source in self._environment.property_sources:
            _add_missing(result, self._source_properties(source))
        return result

    def _source_properties(self, source: PropertySource) -> dict[str, str | None]:
        result: dict[str, str | None] = {}
        if isinstance(source, CompositePropertySource):
            for nested in source.property_sources:
                _add_missing(result, self._source_properties(nested))
        elif isinstance(source, EnumerablePropertySource):
            try:
                names = source.property_names()
            except Exception:
                logger.warning(
                    "property_source_not_enumerable", source=source.name, type=type(source).__name__, exc_info=True
                )
                return result
            for key in names:
                if key in result:
                    continue
                raw = source.get_property(key)
                value = convert_value_to_string(raw)
                if raw is None or value is not None:
                    result[key] = value
        else:
            logger.warning("property_source_not_enumerable", source=source.name, type=type(source).__name__)
        return result


def _add_missing(base: dict[str, str | None], additions: dict[str, str | None]) -> None:
    for key, value in additions.items():
        base.setdefault(key, value)
