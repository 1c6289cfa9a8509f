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
"""TypedAccessor — typed, defaulted property getters shared by every property holder.

Anything that can answer ``get_property_value``, ``contains`` and
``contains_value`` for a dotted key gets the same string, boolean, numeric
and list conversions, so a :class:`~servicecfg.core.configuration.ServiceConfiguration`
and every :class:`~servicecfg.core.group.PropertyGroup` broken out of it
behave identically.

Absent keys resolve to the caller's default. Present but unparsable
numeric values log a warning and also resolve to the default; no getter
raises for bad property data.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import TypeVar

import structlog

T = TypeVar("T")

logger = structlog.get_logger("servicecfg.core.accessor")

_INT_MIN, _INT_MAX = -(2**31), 2**31 - 1
_LONG_MIN, _LONG_MAX = -(2**63), 2**63 - 1
_INTEGER_RE = re.compile(r"[+-]?[0-9]+")


def _bounded_int(low: int, high: int) -> Callable[[str], int]:
    def parse(value: str) -> int:
        if not _INTEGER_RE.fullmatch(value):
            raise ValueError(f"{value!r} is not an integer literal")
        result = int(value)
        if not low <= result <= high:
            raise ValueError(f"{value!r} is outside [{low}, {high}]")
        return result

    return parse


class TypedAccessor(ABC):
    """Mixin providing typed getters over a string-valued property store."""

    @abstractmethod
    def get_property_value(self, name: str) -> str | None: ...

    @abstractmethod
    def contains(self, name: str) -> bool: ...

    @abstractmethod
    def contains_value(self, name: str) -> bool: ...

    def get_string(self, name: str, default: str | None = None) -> str | None:
        value = self.get_property_value(name)
        return default if value is None else value

    def get_string_array(self, name: str) -> list[str] | None:
        """Split the property value on commas.

        An empty value yields ``[""]``; only an absent key yields None.
        """
        return self.get_string_list(name, ",")

    def get_string_list(self, name: str, separator: str = ",") -> list[str] | None:
        """Split the property value on *separator*, or None when absent."""
        value = self.get_string(name)
        return None if value is None else value.split(separator)

    def get_boolean(self, name: str, default: bool | None = None) -> bool | None:
        """Return True only for the literal ``true`` (any case).

        Any other present value is False; malformed input is not reported.
        """
        value = self.get_property_value(name)
        if value is None:
            return default
        return value.lower() == "true"

    def get_integer(self, name: str, default: int | None = None) -> int | None:
        return self._convert(name, default, _bounded_int(_INT_MIN, _INT_MAX), "integer")

    def get_long(self, name: str, default: int | None = None) -> int | None:
        return self._convert(name, default, _bounded_int(_LONG_MIN, _LONG_MAX), "long")

    def get_float(self, name: str, default: float | None = None) -> float | None:
        return self._convert(name, default, float, "float")

    def get_double(self, name: str, default: float | None = None) -> float | None:
        return self._convert(name, default, float, "double")

    def _convert(
        self,
        name: str,
        default: T | None,
        parse: Callable[[str], T],
        target: str,
    ) -> T | None:
        if not self.contains(name):
            return default
        try:
            return resolve(parse(self.get_property_value(name)), default)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            logger.warning("property_conversion_failed", name=name, target=target)
            return default


def resolve(value: T | None, default: T | None) -> T | None:
    """Return *value*, or *default* when it is None."""
    return default if value is None else value


# ------------------------------------------------------------------
# Null-safe extraction helpers
# ------------------------------------------------------------------


def extract_string(configuration: TypedAccessor | None, key: str, default: str | None) -> str | None:
    """Read a string from *configuration*, tolerating a missing configuration object."""
    return configuration.get_string(key, default) if configuration is not None else default


def extract_boolean(configuration: TypedAccessor | None, key: str, default: bool | None) -> bool | None:
    return configuration.get_boolean(key, default) if configuration is not None else default


def extract_integer(configuration: TypedAccessor | None, key: str, default: int | None) -> int | None:
    return configuration.get_integer(key, default) if configuration is not None else default


def extract_long(configuration: TypedAccessor | None, key: str, default: int | None) -> int | None:
    return configuration.get_long(key, default) if configuration is not None else default


def extract_float(configuration: TypedAccessor | None, key: str, default: float | None) -> float | None:
    return configuration.get_float(key, default) if configuration is not None else default


def extract_double(configuration: TypedAccessor | None, key: str, default: float | None) -> float | None:
    return configuration.get_double(key, default) if configuration is not None else default
