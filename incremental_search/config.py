"""Configuration for the incremental search engine and its tool server."""
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional

from incremental_search.search_types import SearchConfig
from incremental_search.tokenizer import get_field_value

DEFAULT_FIELDS = ["title", "category", "subtitle", "description"]

_TRUE_VALUES = ("1", "true", "yes", "on")


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUE_VALUES


def _env_list(name: str, default: List[str]) -> List[str]:
    raw = os.environ.get(name)
    if not raw:
        return list(default)
    return [part.strip() for part in raw.split(",") if part.strip()]


@dataclass
class EngineDefaults:
    """Default engine settings (overridable per engine in SearchConfig)."""
    debounce_ms: int = 200  # Quiet period before the filtered view updates
    max_suggestions: int = 5
    enable_suggestions: bool = True

    @classmethod
    def from_env(cls) -> "EngineDefaults":
        """Create engine defaults from environment variables."""
        return cls(
            debounce_ms=int(os.environ.get("SEARCH_DEBOUNCE_MS", "200")),
            max_suggestions=int(os.environ.get("SEARCH_MAX_SUGGESTIONS", "5")),
            enable_suggestions=_env_bool("SEARCH_ENABLE_SUGGESTIONS", True),
        )


@dataclass
class Config:
    """Main configuration for the search tool server."""
    engine: EngineDefaults = field(default_factory=EngineDefaults.from_env)
    records_path: Optional[Path] = None  # None = no records loaded
    fields: List[str] = field(default_factory=lambda: list(DEFAULT_FIELDS))
    label_field: str = "title"
    key_field: str = "id"
    result_limit: int = 20  # Max records returned by search_records

    @classmethod
    def from_env(cls) -> "Config":
        """Create config from environment variables."""
        records_path_str = os.environ.get("SEARCH_RECORDS_PATH")
        records_path = Path(records_path_str) if records_path_str else None

        return cls(
            engine=EngineDefaults.from_env(),
            records_path=records_path,
            fields=_env_list("SEARCH_FIELDS", DEFAULT_FIELDS),
            label_field=os.environ.get("SEARCH_LABEL_FIELD", "title"),
            key_field=os.environ.get("SEARCH_KEY_FIELD", "id"),
            result_limit=int(os.environ.get("SEARCH_RESULT_LIMIT", "20")),
        )

    def search_config(self) -> SearchConfig[Any]:
        """Build a SearchConfig whose label and key are read by field path.

        Raises:
            ValueError: If the configured values are invalid
        """
        label_field = self.label_field
        key_field = self.key_field

        return SearchConfig(
            fields=self.fields,
            get_label=lambda record: get_field_value(record, label_field),
            get_key=lambda record: get_field_value(record, key_field),
            debounce_ms=self.engine.debounce_ms,
            max_suggestions=self.engine.max_suggestions,
            enable_suggestions=self.engine.enable_suggestions,
        )


# Global config instances
_config: Optional[Config] = None
_search_config: Optional[SearchConfig[Any]] = None


def get_config() -> Config:
    """Get the global config instance.

    Returns:
        Config loaded from environment
    """
    global _config

    if _config is None:
        _config = Config.from_env()

    return _config


def get_search_config() -> SearchConfig[Any]:
    """Get the validated SearchConfig built from the global config.

    Raises:
        ValueError: If the environment holds invalid engine settings
    """
    global _search_config

    if _search_config is None:
        _search_config = get_config().search_config()

    return _search_config


def reset_config() -> None:
    """Forget the global config so the next get_config() re-reads the environment."""
    global _config, _search_config
    _config = None
    _search_config = None
