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
"""servicecfg core — typed property access and prefix grouping."""

from servicecfg.core.accessor import (
    TypedAccessor,
    extract_boolean,
    extract_double,
    extract_float,
    extract_integer,
    extract_long,
    extract_string,
)
from servicecfg.core.configuration import PropertyEnvironment, ServiceConfiguration, convert_value_to_string
from servicecfg.core.group import MASK, PASSWORD_SLUGS, PropertyGroup
from servicecfg.core.value import Value

__all__ = [
    "MASK",
    "PASSWORD_SLUGS",
    "PropertyEnvironment",
    "PropertyGroup",
    "ServiceConfiguration",
    "TypedAccessor",
    "Value",
    "convert_value_to_string",
    "extract_boolean",
    "extract_double",
    "extract_float",
    "extract_integer",
    "extract_long",
    "extract_string",
]
