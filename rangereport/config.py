import logging
from pathlib import Path

import yaml

from .core.models import RangeSelector
from .core.types import PRESETS, SORT_COLUMNS

logger = logging.getLogger(__name__)

REPORT_DIR = Path.home() / ".rangereport"
CONFIG_PATH = REPORT_DIR / "config.yaml"

DEFAULT_PRESET = "week"
DEFAULT_SORT = "date"


class Config:
    """Single-instance config manager. Load once, cache in memory."""

    _instance: "Config | None" = None
    _data: dict[str, object]

    def __new__(cls) -> "Config":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._data = {}
            cls._instance._load()
        return cls._instance

    def _load(self) -> None:
        """Load config from disk."""
        if not CONFIG_PATH.exists():
            self._data = {}
            return
        try:
            with CONFIG_PATH.open() as f:
                loaded = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            logger.warning("ignoring unreadable config %s: %s", CONFIG_PATH, e)
            loaded = None
        self._data = loaded if isinstance(loaded, dict) else {}

    def _save(self) -> None:
        """Persist config to disk."""
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        with CONFIG_PATH.open("w") as f:
            yaml.dump(self._data, f, default_flow_style=False, allow_unicode=True)

    def reload(self) -> None:
        self._load()

    def get(self, key: str, default: object = None) -> object:
        """Get config value."""
        return self._data.get(key, default)

    def set(self, key: str, value: object) -> None:
        """Set config value and persist."""
        self._data[key] = value
        self._save()


_config = Config()


def get_default_preset() -> str:
    """Preset used when none is given. Falls back to 'week' on unknown or 'custom' values."""
    val = str(_config.get("default_preset") or "").strip().lower()
    if val in PRESETS and val != "custom":
        return val
    return DEFAULT_PRESET


def set_default_preset(preset: str) -> None:
    _config.set("default_preset", preset)


def get_default_selector() -> RangeSelector:
    return RangeSelector(preset=get_default_preset())  # type: ignore[arg-type]


def get_default_sort() -> str:
    val = str(_config.get("default_sort") or "").strip().lower()
    return val if val in SORT_COLUMNS else DEFAULT_SORT


def set_default_sort(column: str) -> None:
    _config.set("default_sort", column)


def get_snapshot_path() -> Path | None:
    """Snapshot file read when --file is not given. None = not configured."""
    val = _config.get("snapshot_path")
    return Path(str(val)).expanduser() if val else None


def set_snapshot_path(path: str) -> None:
    _config.set("snapshot_path", str(Path(path).expanduser()))
