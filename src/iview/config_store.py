# src/iview/config_store.py
from __future__ import annotations
from pathlib import Path
from typing import Dict, Optional, List
import logging
import orjson
from platformdirs import user_config_dir

APP_NAME = "iview"
KEYS = ("command", "application", "extension")

log = logging.getLogger(__name__)


class ConfigStore:
    def __init__(self, app_name: str = APP_NAME, config_dir: Optional[Path] = None):
        cfg_dir = Path(config_dir) if config_dir else Path(user_config_dir(app_name))
        cfg_dir.mkdir(parents=True, exist_ok=True)
        self._path = cfg_dir / "profiles.json"
        self._data: Dict[str, Dict[str, str]] = {}
        self._load()

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> None:
        if self._path.exists():
            try:
                data = orjson.loads(self._path.read_bytes())
                if not isinstance(data, dict):
                    data = {}
                # プロフィールは dict のみ採用（手編集で壊れた値は捨てる）
                self._data = {k: v for k, v in data.items() if isinstance(v, dict)}
            except orjson.JSONDecodeError:
                # 壊れてたら空扱い
                log.warning("profiles.json is not valid JSON, ignoring: %s", self._path)
                self._data = {}
        else:
            self._data = {}

    def _save(self) -> None:
        self._path.write_bytes(orjson.dumps(self._data, option=orjson.OPT_INDENT_2))

    def list_profiles(self) -> List[str]:
        return sorted(self._data.keys())

    def get(self, profile: str, key: str) -> Optional[str]:
        info = self._data.get(profile)
        if not info:
            return None
        return info.get(key) or None

    def set(self, profile: str, key: str, value: str) -> None:
        if key not in KEYS:
            raise KeyError(f"unknown key: {key} (expected one of {', '.join(KEYS)})")
        if not value:
            raise ValueError(f"{key} must not be empty")
        self._data.setdefault(profile, {})[key] = value
        self._save()

    def unset(self, profile: str, key: str) -> bool:
        info = self._data.get(profile)
        if not info or key not in info:
            return False
        del info[key]
        if not info:
            del self._data[profile]
        self._save()
        return True

    def as_dict(self) -> Dict[str, Dict[str, str]]:
        return dict(self._data)
