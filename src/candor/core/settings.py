import copy
import yaml
import pathlib
from typing import Any

DEFAULTS: dict[str, Any] = {
    "lines": {
        "scan_limit_bytes": None,
        "chunk_size": 1024 * 1024,
    },
    "range": {
        "padding_len": 0,
    },
    "logging": {
        "level": "WARNING",
    },
}


class Settings:
    """
    Centralised configuration.
    Built-in defaults overridden by an optional YAML file.
    """

    def __init__(self, config_path: str = None):
        if config_path is None:
            # Looked up relative to where the command runs; optional
            self.config_path = pathlib.Path.cwd() / "config" / "candor.yaml"
            self.explicit = False
        else:
            self.config_path = pathlib.Path(config_path)
            self.explicit = True

    def load(self) -> dict[str, Any]:
        if not self.config_path.exists():
            if self.explicit:
                raise FileNotFoundError(
                    f"Configuration file not found: {self.config_path}")
            return copy.deepcopy(DEFAULTS)
        return self.merge_configs(copy.deepcopy(DEFAULTS), self._read_yaml(self.config_path))

    def _read_yaml(self, path: pathlib.Path) -> dict[str, Any]:
        with open(path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}

    @staticmethod
    def merge_configs(base: dict, override: dict) -> dict:
        """
        Recursive merge of configuration dictionaries.
        """
        result = base.copy()
        for key, value in override.items():
            if isinstance(value, dict) and key in result and isinstance(result[key], dict):
                result[key] = Settings.merge_configs(result[key], value)
            else:
                result[key] = value
        return result
