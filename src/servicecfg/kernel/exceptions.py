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
"""Exception hierarchy for servicecfg.

The typed accessors never raise for missing or malformed property data;
a missing key or an unparsable value degrades to the caller's default.
These exceptions are reserved for explicit caller errors in the outer
layers.

Categories:
- PropertySourceException: a property file or layer could not be loaded
- PropertyResolutionException: a required ``${key}`` expression has no value
"""

from __future__ import annotations


class ServiceConfigException(Exception):
    """Base exception for all servicecfg errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "SOURCE_001").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


class PropertySourceException(ServiceConfigException):
    """A property source could not be read or has an unsupported format."""


class PropertyResolutionException(ServiceConfigException, KeyError):
    """A required property expression could not be resolved."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""
