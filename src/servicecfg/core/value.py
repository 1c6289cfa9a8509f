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
"""Value expressions resolved against any typed property holder.

Usage::

    class PoolSettings:
        url = Value("${oracle.connection.url}")
        size = Value("${oracle.connection.pool-size:10}")

    settings.size.resolve(configuration)
"""

from __future__ import annotations

import re

from servicecfg.core.accessor import TypedAccessor
from servicecfg.kernel.exceptions import PropertyResolutionException

_PLACEHOLDER_RE = re.compile(r"^\$\{([^}]+)\}$")


class Value:
    """A configuration expression.

    Expressions:
        ``${key}`` — resolve the property, raise if it has no value.
        ``${key:default}`` — resolve the property, use default if it has no value.
        ``literal`` — return the string as-is (no ``${}`` wrapper).
    """

    def __init__(self, expression: str) -> None:
        self._expression = expression

    @property
    def expression(self) -> str:
        return self._expression

    def resolve(self, configuration: TypedAccessor) -> str:
        match = _PLACEHOLDER_RE.match(self._expression)
        if not match:
            return self._expression

        inner = match.group(1)
        if ":" in inner:
            key, default = inner.split(":", 1)
            return configuration.get_string(key, default)  # type: ignore[return-value]

        result = configuration.get_string(inner)
        if result is None:
            raise PropertyResolutionException(
                f"Configuration key '{inner}' not found and no default provided "
                f"in Value expression '{self._expression}'",
                code="RESOLVE_001",
                context={"key": inner},
            )
        return result
