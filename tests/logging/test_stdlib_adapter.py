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
"""Tests for StdlibLoggingAdapter."""

import logging

from servicecfg.context.environment import LayeredEnvironment, MapPropertySource
from servicecfg.core.configuration import ServiceConfiguration
from servicecfg.core.group import PropertyGroup
from servicecfg.logging.port import LoggingPort
from servicecfg.logging.stdlib_adapter import StdlibLoggingAdapter


def _configuration(**properties) -> ServiceConfiguration:
    return ServiceConfiguration(LayeredEnvironment([MapPropertySource("test", properties)]))


class TestStdlibLoggingAdapter:
    def test_implements_logging_port(self):
        assert isinstance(StdlibLoggingAdapter(), LoggingPort)

    def test_configure_levels(self):
        adapter = StdlibLoggingAdapter()
        adapter.configure(
            _configuration(
                **{
                    "servicecfg.logging.level.root": "warning",
                    "servicecfg.logging.level.myapp.jobs": "debug",
                }
            )
        )
        assert logging.getLogger().level == logging.WARNING
        assert logging.getLogger("myapp.jobs").level == logging.DEBUG

    def test_configure_from_property_group(self):
        adapter = StdlibLoggingAdapter()
        adapter.configure(PropertyGroup("", {"servicecfg.logging.level.myapp.batch": "error"}))
        assert logging.getLogger("myapp.batch").level == logging.ERROR

    def test_structured_message(self, caplog):
        logger = StdlibLoggingAdapter().get_logger("myapp.structured")
        with caplog.at_level(logging.INFO, logger="myapp.structured"):
            logger.info("pool_created", size=5, name="orders")
        assert caplog.records[0].getMessage() == "pool_created | size=5 name=orders"

    def test_plain_message(self, caplog):
        logger = StdlibLoggingAdapter().get_logger("myapp.plain")
        with caplog.at_level(logging.WARNING, logger="myapp.plain"):
            logger.warning("slow_start")
        assert caplog.records[0].getMessage() == "slow_start"

    def test_logging_keywords_pass_through(self, caplog):
        logger = StdlibLoggingAdapter().get_logger("myapp.errors")
        with caplog.at_level(logging.ERROR, logger="myapp.errors"):
            try:
                raise ValueError("bad")
            except ValueError:
                logger.error("load_failed", exc_info=True, path="a.yaml")
        record = caplog.records[0]
        assert record.getMessage() == "load_failed | path=a.yaml"
        assert record.exc_info is not None
