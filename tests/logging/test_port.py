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
"""Tests for LoggingPort protocol and LoggingSettings."""

import logging
from typing import Any

import pytest

from servicecfg.context.environment import LayeredEnvironment, MapPropertySource
from servicecfg.core.configuration import ServiceConfiguration
from servicecfg.core.group import PropertyGroup
from servicecfg.logging.port import LoggingPort, LoggingSettings, to_level

PROPERTIES = {
    "servicecfg.logging.level.root": "debug",
    "servicecfg.logging.level.myapp.services": "warning",
    "servicecfg.logging.format": "JSON",
    "servicecfg.logging.cache-loggers": "false",
}


def _configuration(properties: dict) -> ServiceConfiguration:
    return ServiceConfiguration(LayeredEnvironment([MapPropertySource("test", properties)]))


class TestLoggingPortProtocol:
    def test_conforming_class_is_instance(self):
        class FakeLogging:
            def configure(self, configuration: Any) -> None:
                pass

            def get_logger(self, name: str) -> Any:
                pass

            def set_level(self, name: str, level: str) -> None:
                pass

        assert isinstance(FakeLogging(), LoggingPort)

    def test_non_conforming_class_is_not_instance(self):
        class Incomplete:
            def get_logger(self, name: str) -> Any:
                pass

        assert not isinstance(Incomplete(), LoggingPort)


class TestLoggingSettings:
    def test_defaults(self):
        settings = LoggingSettings.from_configuration(_configuration({}))
        assert settings == LoggingSettings()
        assert settings.json_output is False

    def test_reads_levels_by_prefix(self):
        settings = LoggingSettings.from_configuration(_configuration(PROPERTIES))
        assert settings.root_level == "DEBUG"
        assert settings.module_levels == {"myapp.services": "WARNING"}
        assert settings.format == "json"
        assert settings.json_output is True
        assert settings.cache_loggers is False

    def test_reads_from_property_group(self):
        from_group = LoggingSettings.from_configuration(PropertyGroup("", PROPERTIES))
        assert from_group == LoggingSettings.from_configuration(_configuration(PROPERTIES))

    def test_property_group_without_levels(self):
        settings = LoggingSettings.from_configuration(PropertyGroup("", {"servicecfg.logging.format": "json"}))
        assert settings.root_level == "INFO"
        assert settings.module_levels == {}
        assert settings.format == "json"

    def test_apply_levels(self):
        LoggingSettings(root_level="ERROR", module_levels={"myapp.apply": "DEBUG"}).apply_levels("%(message)s")
        assert logging.getLogger().level == logging.ERROR
        assert logging.getLogger("myapp.apply").level == logging.DEBUG


class TestToLevel:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [("debug", logging.DEBUG), ("WARNING", logging.WARNING), ("bogus", logging.INFO)],
    )
    def test_to_level(self, name, expected):
        assert to_level(name) == expected
