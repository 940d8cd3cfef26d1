"""Tests for user-level and project-level condition loading."""

import pytest

from runconditions.conditions.file_length import FileLengthCondition
from runconditions.conditions.loader import (
    ConditionLoader,
    build_condition,
    get_conditions_loader,
    load,
)
from runconditions.conditions.os_condition import OSCondition
from runconditions.primitives.errors import ConfigurationError


@pytest.fixture
def loader():
    loader = ConditionLoader()
    loader.clear_cache()
    return loader


@pytest.fixture
def project_dir(tmp_path):
    """Create a project directory with .ai/config structure."""
    proj = tmp_path / "project"
    (proj / ".ai" / "config").mkdir(parents=True)
    return proj


def write_project_config(project_dir, text):
    (project_dir / ".ai" / "config" / "conditions.yaml").write_text(text)


def write_user_config(user_space, text):
    config_dir = user_space / ".ai" / "config"
    config_dir.mkdir(parents=True, exist_ok=True)
    (config_dir / "conditions.yaml").write_text(text)


class TestBuildCondition:
    def test_file_length(self):
        condition = build_condition(
            {"id": "big", "kind": "file-length", "file": "a.bin", "length": 10, "when": "ge"}
        )
        assert isinstance(condition, FileLengthCondition)
        assert condition.length == "10"
        assert condition.when == "ge"

    def test_os(self):
        condition = build_condition({"id": "linux", "kind": "os", "family": "unix"})
        assert isinstance(condition, OSCondition)
        assert condition.family == "unix"
        assert condition.name == ""

    def test_unknown_kind(self):
        with pytest.raises(ConfigurationError) as exc_info:
            build_condition({"kind": "disk-space"})
        assert exc_info.value.field == "kind"

    def test_unknown_field(self):
        with pytest.raises(ConfigurationError) as exc_info:
            build_condition({"kind": "os", "family": "unix", "cpu": "arm"})
        assert exc_info.value.field == "cpu"

    def test_negative_length_rejected(self):
        with pytest.raises(ConfigurationError) as exc_info:
            build_condition({"kind": "file-length", "file": "a", "length": -5, "when": "eq"})
        assert exc_info.value.field == "length"

    def test_missing_file_rejected(self):
        with pytest.raises(ConfigurationError) as exc_info:
            build_condition({"kind": "file-length", "length": 1, "when": "eq"})
        assert exc_info.value.field == "file"

    def test_empty_os_expectation_rejected(self):
        with pytest.raises(ConfigurationError) as exc_info:
            build_condition({"kind": "os", "family": "", "arch": None})
        assert exc_info.value.field == "family"

    def test_empty_base_dir_defaults_to_workspace(self):
        condition = build_condition(
            {"kind": "file-length", "file": "a", "length": 1, "when": "eq", "base_dir": None}
        )
        assert condition.base_dir.kind == "workspace"

    def test_unknown_base_dir(self):
        with pytest.raises(ConfigurationError):
            build_condition(
                {"kind": "file-length", "file": "a", "length": 1, "when": "eq", "base_dir": "tmp"}
            )


class TestConditionLoader:
    def test_no_config_returns_empty(self, loader, project_dir):
        assert loader.load(project_dir) == {}
        assert loader.get_conditions(project_dir) == {}

    def test_project_conditions_loaded(self, loader, project_dir):
        write_project_config(
            project_dir,
            """conditions:
  - id: large-artifact
    kind: file-length
    file: dist/app.tar.gz
    length: 1048576
    when: ge
  - id: linux-only
    kind: os
    family: unix
""",
        )
        conditions = loader.get_conditions(project_dir)
        assert list(conditions) == ["large-artifact", "linux-only"]
        assert conditions["large-artifact"].length == "1048576"
        assert isinstance(conditions["linux-only"], OSCondition)

    def test_project_overrides_user_by_id(self, loader, project_dir, _setup_user_space):
        write_user_config(
            _setup_user_space,
            """conditions:
  - id: platform
    kind: os
    family: windows
  - id: user-only
    kind: os
    arch: amd64
""",
        )
        write_project_config(
            project_dir,
            """conditions:
  - id: platform
    kind: os
    family: unix
  - id: project-only
    kind: file-length
    file: a.txt
    length: 0
    when: gt
""",
        )
        conditions = loader.get_conditions(project_dir)
        assert list(conditions) == ["platform", "user-only", "project-only"]
        assert conditions["platform"].family == "unix"

    def test_invalid_entry_names_condition(self, loader, project_dir):
        write_project_config(
            project_dir,
            """conditions:
  - id: broken
    kind: file-length
    file: a.txt
    length: lots
    when: eq
""",
        )
        with pytest.raises(ConfigurationError) as exc_info:
            loader.get_conditions(project_dir)
        assert "broken" in str(exc_info.value)
        assert exc_info.value.field == "length"

    def test_entry_must_be_mapping(self, loader, project_dir):
        write_project_config(project_dir, "conditions:\n  - just-a-string\n")
        with pytest.raises(ConfigurationError):
            loader.get_conditions(project_dir)

    def test_invalid_yaml(self, loader, project_dir):
        write_project_config(project_dir, "conditions: [unclosed\n")
        with pytest.raises(ConfigurationError):
            loader.load(project_dir)

    def test_top_level_must_be_mapping(self, loader, project_dir):
        write_project_config(project_dir, "- a\n- b\n")
        with pytest.raises(ConfigurationError):
            loader.load(project_dir)

    def test_load_is_cached(self, loader, project_dir):
        write_project_config(project_dir, "conditions: []\n")
        first = loader.load(project_dir)
        write_project_config(project_dir, "conditions:\n  - {id: a, kind: os, family: unix}\n")
        assert loader.load(project_dir) is first
        loader.clear_cache()
        assert len(loader.get_condition_entries(project_dir)) == 1


class TestMerge:
    def test_dicts_merge_deeply(self, loader):
        merged = loader._merge({"a": {"x": 1, "y": 2}}, {"a": {"y": 3}})
        assert merged == {"a": {"x": 1, "y": 3}}

    def test_lists_without_ids_replace(self, loader):
        assert loader._merge({"a": [1, 2]}, {"a": [3]}) == {"a": [3]}

    def test_conditions_merge_by_id_in_place(self, loader):
        user = {"conditions": [{"id": "a", "family": "unix"}, {"id": "b", "arch": "x86"}]}
        project = {"conditions": [{"id": "c", "arch": "arm"}, {"id": "a", "family": "mac"}]}
        merged = loader._merge(user, project)
        assert merged["conditions"] == [
            {"id": "a", "family": "mac"},
            {"id": "b", "arch": "x86"},
            {"id": "c", "arch": "arm"},
        ]


class TestModuleLoader:
    def test_singleton(self):
        assert get_conditions_loader() is get_conditions_loader()

    def test_load_helper(self, project_dir):
        write_project_config(project_dir, "conditions: []\n")
        assert load(project_dir) == {"conditions": []}
