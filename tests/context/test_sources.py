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
"""Tests for file and environment-variable property sources."""

from pathlib import Path

import pytest

from servicecfg.context.environment import LayeredEnvironment, MapPropertySource
from servicecfg.context.sources import environ_property_source, flatten, load_property_file
from servicecfg.core.configuration import ServiceConfiguration
from servicecfg.kernel.exceptions import PropertySourceException


class TestFlatten:
    def test_nested_mappings(self):
        assert flatten({"db": {"pool": {"size": 10}, "url": "u"}}) == {"db.pool.size": 10, "db.url": "u"}

    def test_lists_become_comma_separated(self):
        assert flatten({"hosts": ["a", "b"]}) == {"hosts": "a,b"}

    def test_empty_mapping_is_a_leaf(self):
        assert flatten({"empty": {}}) == {"empty": {}}


class TestLoadPropertyFile:
    def test_yaml(self, tmp_path: Path):
        path = tmp_path / "application.yaml"
        path.write_text("oracle:\n  connection:\n    evildb:\n      url: u1\n    gooddb:\n      url: u2\n")
        source = load_property_file(path)
        assert source.name == str(path)
        assert source.get_property("oracle.connection.evildb.url") == "u1"

    def test_yaml_is_read_as_utf8(self, tmp_path: Path):
        path = tmp_path / "application.yaml"
        path.write_text("greeting: gr\u00fc\u00dfe\n", encoding="utf-8")
        assert load_property_file(path).get_property("greeting") == "gr\u00fc\u00dfe"

    def test_toml(self, tmp_path: Path):
        path = tmp_path / "application.toml"
        path.write_text('[server]\nport = 8080\ndebug = true\n')
        source = load_property_file(path, name="app")
        assert source.name == "app"
        assert source.get_property("server.port") == 8080

    def test_empty_yaml(self, tmp_path: Path):
        path = tmp_path / "empty.yml"
        path.write_text("")
        assert load_property_file(path).property_names() == []

    def test_unsupported_suffix(self, tmp_path: Path):
        path = tmp_path / "app.ini"
        path.write_text("[a]\n")
        with pytest.raises(PropertySourceException) as exc_info:
            load_property_file(path)
        assert exc_info.value.code == "SOURCE_001"

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(PropertySourceException) as exc_info:
            load_property_file(tmp_path / "missing.yaml")
        assert exc_info.value.code == "SOURCE_002"

    def test_malformed_yaml(self, tmp_path: Path):
        path = tmp_path / "bad.yaml"
        path.write_text("a: [1, 2\n")
        with pytest.raises(PropertySourceException):
            load_property_file(path)

    def test_non_mapping_document(self, tmp_path: Path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(PropertySourceException) as exc_info:
            load_property_file(path)
        assert exc_info.value.code == "SOURCE_003"

    def test_layered_files(self, tmp_path: Path):
        profile = tmp_path / "application-dev.yaml"
        profile.write_text("server:\n  port: 9090\n")
        base = tmp_path / "application.yaml"
        base.write_text("server:\n  port: 8080\n  host: localhost\n")
        env = LayeredEnvironment([load_property_file(profile), load_property_file(base)])
        group = ServiceConfiguration(env).collect_prefixed("server")
        assert group.to_map() == {"port": "9090", "host": "localhost"}


class TestEnvironPropertySource:
    def test_maps_variables_to_dotted_keys(self, monkeypatch):
        monkeypatch.setenv("MYSVC_ORACLE_URL", "u")
        monkeypatch.setenv("OTHER_VALUE", "x")
        source = environ_property_source("mysvc")
        assert source.name == "environment"
        assert source.get_property("oracle.url") == "u"
        assert "value" not in source.property_names()

    def test_overrides_file_layer(self, monkeypatch):
        monkeypatch.setenv("MYSVC_SERVER_PORT", "7070")
        env = LayeredEnvironment(
            [environ_property_source("MYSVC_"), MapPropertySource("inline", flatten({"server": {"port": 8080}}))]
        )
        assert ServiceConfiguration(env).get_integer("server.port") == 7070
