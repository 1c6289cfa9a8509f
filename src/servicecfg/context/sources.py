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
"""Property sources built from YAML/TOML files and environment variables."""

from __future__ import annotations

import os
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]

from servicecfg.context.environment import MapPropertySource
from servicecfg.kernel.exceptions import PropertySourceException

_YAML_SUFFIXES = (".yaml", ".yml")


def flatten(data: Mapping[str, Any], prefix: str = "") -> dict[str, Any]:
    """Flatten nested mappings into dotted keys.

    ``{"db": {"pool": {"size": 10}}}`` becomes ``{"db.pool.size": 10}``.
    Lists become comma-separated strings so they read back through
    ``get_string_list``; other scalars are kept as leaf values.
    """
    flat: dict[str, Any] = {}
    for key, value in data.items():
        name = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, Mapping) and value:
            flat.update(flatten(value, name))
        elif isinstance(value, list):
            flat[name] = ",".join(str(item) for item in value)
        else:
            flat[name] = value
    return flat


def _load_data(path: Path) -> Any:
    if path.suffix == ".toml":
        with open(path, "rb") as f:
            return tomllib.load(f)
    if path.suffix in _YAML_SUFFIXES:
        with open(path, encoding="utf-8") as f:
            return yaml.safe_load(f) or {}
    raise PropertySourceException(
        f"Unsupported property file type '{path.suffix}'",
        code="SOURCE_001",
        context={"path": str(path)},
    )


def load_property_file(path: str | Path, name: str | None = None) -> MapPropertySource:
    """Load a YAML or TOML file into a flat :class:`MapPropertySource`."""
    path = Path(path)
    try:
        data = _load_data(path)
    except (OSError, yaml.YAMLError, tomllib.TOMLDecodeError) as exc:
        raise PropertySourceException(
            f"Cannot load property file '{path}': {exc}",
            code="SOURCE_002",
            context={"path": str(path)},
        ) from exc

    if not isinstance(data, Mapping):
        raise PropertySourceException(
            f"Property file '{path}' must contain a mapping at the top level",
            code="SOURCE_003",
            context={"path": str(path)},
        )
    return MapPropertySource(name or str(path), flatten(data))


def environ_property_source(prefix: str, name: str = "environment") -> MapPropertySource:
    """Expose ``PREFIX_SECTION_KEY`` environment variables as ``section.key`` properties."""
    env_prefix = prefix.upper().rstrip("_") + "_"
    properties = {
        key[len(env_prefix) :].lower().replace("_", "."): value
        for key, value in os.environ.items()
        if key.startswith(env_prefix) and len(key) > len(env_prefix)
    }
    return MapPropertySource(name, properties)
