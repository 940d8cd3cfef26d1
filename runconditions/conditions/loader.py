"""Condition configuration loader.

Reads ``conditions.yaml`` from user space and project space, merges them
(project wins, list entries merged by ``id``) and builds RunCondition objects.

    conditions:
      - id: large-artifact
        kind: file-length
        file: dist/app.tar.gz
        length: 1048576
        when: ge
      - id: linux-only
        kind: os
        family: unix
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Type

import yaml

from runconditions.conditions.base import RunCondition
from runconditions.conditions.file_length import FileLengthCondition
from runconditions.conditions.os_condition import OSCondition
from runconditions.config import get_user_ai_path
from runconditions.constants import AI_DIR, CONDITIONS_CONFIG
from runconditions.primitives.errors import ConfigurationError

logger = logging.getLogger(__name__)

CONDITION_TYPES: Dict[str, Type[RunCondition]] = {
    FileLengthCondition.kind: FileLengthCondition,
    OSCondition.kind: OSCondition,
}

_CONDITION_FIELDS = {
    FileLengthCondition.kind: ("file", "length", "when", "base_dir"),
    OSCondition.kind: ("family", "name", "arch", "version"),
}

_REQUIRED_FIELDS = {
    FileLengthCondition.kind: ("file", "length", "when"),
    OSCondition.kind: (),
}

_META_FIELDS = ("id", "kind", "description")


def _entry_id(item: Any) -> Optional[Any]:
    return item.get("id") if isinstance(item, dict) else None


def _has_ids(items: list) -> bool:
    return bool(items) and _entry_id(items[0]) is not None


def build_condition(entry: Dict[str, Any]) -> RunCondition:
    """Build and validate a condition from one configuration entry.

    Raises:
        ConfigurationError: Unknown kind, unknown field or invalid value.
    """
    kind = entry.get("kind")
    condition_cls = CONDITION_TYPES.get(kind)
    if condition_cls is None:
        raise ConfigurationError(
            f"Unknown condition kind: {kind!r}. Valid: {', '.join(CONDITION_TYPES)}",
            field="kind",
            value=kind,
        )

    allowed = _CONDITION_FIELDS[kind]
    unknown = sorted(k for k in entry if k not in allowed and k not in _META_FIELDS)
    if unknown:
        raise ConfigurationError(
            f"Unknown field(s) for {kind} condition: {', '.join(unknown)}",
            field=unknown[0],
            value=entry[unknown[0]],
        )

    # YAML turns bare numbers into ints; conditions take strings
    kwargs = {
        k: ("" if entry[k] is None else str(entry[k]))
        for k in allowed
        if k in entry
    }
    for name in _REQUIRED_FIELDS[kind]:
        kwargs.setdefault(name, "")
    if not kwargs.get("base_dir", True):
        del kwargs["base_dir"]
    condition = condition_cls(**kwargs)
    errors = condition.validate()
    if errors:
        raise ConfigurationError.from_validation(errors[0])
    return condition


class ConditionLoader:
    """Loader for conditions.yaml with user → project cascade."""

    def __init__(self, config_name: str = CONDITIONS_CONFIG):
        self.config_name = config_name
        self._cache: Dict[str, Any] = {}

    def load(self, project_path: Path) -> Dict[str, Any]:
        """Load merged config for ``project_path``."""
        cache_key = str(project_path)
        if cache_key in self._cache:
            return self._cache[cache_key]

        config: Dict[str, Any] = {}

        user_config_path = get_user_ai_path() / "config" / self.config_name
        if user_config_path.exists():
            config = self._merge(config, self._load_yaml(user_config_path))

        project_config_path = Path(project_path) / AI_DIR / "config" / self.config_name
        if project_config_path.exists():
            config = self._merge(config, self._load_yaml(project_config_path))

        self._cache[cache_key] = config
        return config

    def get_condition_entries(self, project_path: Path) -> List[Dict[str, Any]]:
        return self.load(project_path).get("conditions", []) or []

    def get_conditions(self, project_path: Path) -> Dict[str, RunCondition]:
        """Build every configured condition, keyed by id."""
        conditions: Dict[str, RunCondition] = {}
        for index, entry in enumerate(self.get_condition_entries(project_path)):
            if not isinstance(entry, dict):
                raise ConfigurationError(
                    f"Condition entry {index} must be a mapping", value=entry
                )
            condition_id = entry.get("id") or f"condition-{index}"
            try:
                conditions[condition_id] = build_condition(entry)
            except ConfigurationError as e:
                raise ConfigurationError(
                    f"Condition {condition_id!r}: {e.message}",
                    field=e.field,
                    value=e.value,
                    cause=e,
                ) from e
        logger.debug(f"Loaded conditions: {list(conditions)}")
        return conditions

    def _load_yaml(self, path: Path) -> Dict[str, Any]:
        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {path}: {e}", cause=e) from e
        if not isinstance(data, dict):
            raise ConfigurationError(f"Expected a mapping at top level of {path}")
        return data

    def _merge(self, base: Dict, override: Dict) -> Dict:
        """Layer a later config file (project) over an earlier one (user).

        Nested mappings merge key by key. The ``conditions`` list merges by
        condition ``id``: a project entry replaces the user entry with the
        same id in place, new ids are appended. Any other value is replaced.
        """
        result = dict(base)
        for key, value in override.items():
            current = result.get(key)
            if isinstance(current, dict) and isinstance(value, dict):
                result[key] = self._merge(current, value)
            elif isinstance(current, list) and isinstance(value, list) and _has_ids(current):
                result[key] = self._merge_list_by_id(current, value)
            else:
                result[key] = value
        return result

    def _merge_list_by_id(self, base_list: list, override_list: list) -> list:
        """Replace base entries by id, keep their order, append the rest."""
        replacements = {
            _entry_id(item): item for item in override_list if _entry_id(item) is not None
        }
        merged = [replacements.get(_entry_id(item), item) for item in base_list]
        base_ids = {_entry_id(item) for item in base_list}
        merged.extend(
            item
            for item in override_list
            if _entry_id(item) is None or _entry_id(item) not in base_ids
        )
        return merged

    def clear_cache(self):
        self._cache.clear()


_conditions_loader: Optional[ConditionLoader] = None


def get_conditions_loader() -> ConditionLoader:
    global _conditions_loader
    if _conditions_loader is None:
        _conditions_loader = ConditionLoader()
    return _conditions_loader


def load(project_path: Path) -> Dict[str, Any]:
    """Merged condition config for ``project_path`` via the shared loader."""
    return get_conditions_loader().load(project_path)
