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
"""Environment — ordered property layers with profile support.

Layers are consulted in order; the first layer holding a non-None value
for a key answers lookups. The environment only stores and queries
layers, it never merges them into one mapping.
"""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Mapping
from typing import Any


class PropertySource:
    """A named, read-only source of property values.

    A plain ``PropertySource`` can answer lookups but cannot list its keys.
    """

    def __init__(self, name: str, source: Any = None) -> None:
        self.name = name
        self.source = source

    def get_property(self, name: str) -> Any:
        return None

    def contains_property(self, name: str) -> bool:
        return self.get_property(name) is not None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


class LookupPropertySource(PropertySource):
    """Non-enumerable source backed by a lookup callable (e.g. a secrets vault)."""

    def __init__(self, name: str, lookup: Callable[[str], Any]) -> None:
        super().__init__(name, lookup)

    def get_property(self, name: str) -> Any:
        return self.source(name)


class EnumerablePropertySource(PropertySource, ABC):
    """A property source whose keys can be listed."""

    @abstractmethod
    def property_names(self) -> list[str]: ...

    def contains_property(self, name: str) -> bool:
        return name in self.property_names()


class MapPropertySource(EnumerablePropertySource):
    """Property source over a flat mapping of dotted keys."""

    def __init__(self, name: str, source: Mapping[str, Any]) -> None:
        super().__init__(name, dict(source))

    def get_property(self, name: str) -> Any:
        return self.source.get(name)

    def contains_property(self, name: str) -> bool:
        return name in self.source

    def property_names(self) -> list[str]:
        return list(self.source)


class CompositePropertySource(EnumerablePropertySource):
    """An ordered group of nested property sources acting as one layer."""

    def __init__(self, name: str, sources: Iterable[PropertySource] | None = None) -> None:
        super().__init__(name, list(sources or []))

    @property
    def property_sources(self) -> list[PropertySource]:
        return list(self.source)

    def add_property_source(self, source: PropertySource) -> None:
        self.source.append(source)

    def add_first_property_source(self, source: PropertySource) -> None:
        self.source.insert(0, source)

    def get_property(self, name: str) -> Any:
        for source in self.source:
            value = source.get_property(name)
            if value is not None:
                return value
        return None

    def contains_property(self, name: str) -> bool:
        return any(source.contains_property(name) for source in self.source)

    def property_names(self) -> list[str]:
        names: dict[str, None] = {}
        for source in self.source:
            if isinstance(source, EnumerablePropertySource):
                names.update(dict.fromkeys(source.property_names()))
        return list(names)


class LayeredEnvironment:
    """Provides ordered property layers and the active profiles.

    Profiles are loaded from (in priority order):
    1. ``SERVICECFG_PROFILES_ACTIVE`` environment variable
    2. ``servicecfg.profiles.active`` property
    """

    def __init__(self, sources: Iterable[PropertySource] | None = None) -> None:
        self._sources: list[PropertySource] = list(sources or [])
        self._active_profiles = self._load_profiles()

    @property
    def property_sources(self) -> list[PropertySource]:
        """Layers in priority order (earlier wins)."""
        return list(self._sources)

    def add_first(self, source: PropertySource) -> None:
        self._sources.insert(0, source)

    def add_last(self, source: PropertySource) -> None:
        self._sources.append(source)

    def get_property(self, name: str, default: Any = None) -> Any:
        """Get a property from the first layer that holds a value for it."""
        for source in self._sources:
            value = source.get_property(name)
            if value is not None:
                return value
        return default

    def contains_property(self, name: str) -> bool:
        return any(source.contains_property(name) for source in self._sources)

    @property
    def active_profiles(self) -> list[str]:
        """Currently active profiles."""
        return list(self._active_profiles)

    def refresh_profiles(self) -> None:
        """Re-read the active profiles after layers were added."""
        self._active_profiles = self._load_profiles()

    def accepts_profiles(self, *profiles: str) -> bool:
        """Return True if any of the given profile expressions match.

        Supports:
        - Simple profiles: "dev" matches if "dev" is active
        - Negation: "!production" matches if "production" is NOT active
        - Comma-separated: "dev,test" matches if "dev" OR "test" is active
        """
        return any(self._matches_profile_expression(expr) for expr in profiles)

    def _matches_profile_expression(self, expr: str) -> bool:
        if "," in expr:
            sub_profiles = [p.strip() for p in expr.split(",") if p.strip()]
            return any(self._matches_single(p) for p in sub_profiles)
        return self._matches_single(expr)

    def _matches_single(self, profile: str) -> bool:
        if profile.startswith("!"):
            return profile[1:] not in self._active_profiles
        return profile in self._active_profiles

    def _load_profiles(self) -> list[str]:
        env_profiles = os.environ.get("SERVICECFG_PROFILES_ACTIVE", "")
        if env_profiles:
            return [p.strip() for p in env_profiles.split(",") if p.strip()]

        config_profiles = self.get_property("servicecfg.profiles.active", "")
        if config_profiles:
            return [p.strip() for p in str(config_profiles).split(",") if p.strip()]

        return []
