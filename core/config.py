"""
Unity Package Extractor Configuration
Single source of truth for all settings.
Load once at startup, pass to all components.
"""
import copy
import json
from pathlib import Path
from .utils.logger import logger


CONFIG_FILENAME = 'unitypackage.config.json'

# Default config values
DEFAULTS = {
    "extraction": {
        "chunk_size_kb": 64,
        "package_extension": ".unitypackage",
        "encoding_detection": True
    },
    "batch": {
        "max_workers": None  # None = auto detect
    },
    "progress": {
        "enabled": True,
        "min_archive_size_mb": 1,
        "bar_width": 50
    },
    "storage": {
        "output_dir": "."
    }
}


class ExtractorConfig:
    def __init__(self, config_path: str = None):
        self._config = copy.deepcopy(DEFAULTS)

        if config_path:
            self.config_path = Path(config_path)
        else:
            # Look for config in project root
            self.config_path = Path(__file__).parent.parent / CONFIG_FILENAME

        if self.config_path.exists():
            self._load()
        else:
            logger.debug(f"No config file found at {self.config_path} — using defaults")

    def _load(self):
        """Load and merge config file over defaults"""
        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                user_config = json.load(f)
            if not isinstance(user_config, dict):
                raise ValueError("top-level value must be an object")
            self._deep_merge(self._config, user_config)
            logger.debug(f"Loaded config from {self.config_path}")
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in config file: {e} — using defaults")
        except (OSError, ValueError) as e:
            logger.error(f"Failed to load config: {e} — using defaults")

    def load(self, path: str):
        """Merge another config file over the current values"""
        self.config_path = Path(path)
        if not self.config_path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        self._load()

    def save(self, path: str = None):
        """Save current config to file"""
        out_path = Path(path) if path else self.config_path
        with open(out_path, 'w', encoding='utf-8') as f:
            json.dump(self._config, f, indent=2)
        logger.info(f"Config saved to {out_path}")

    def get(self, *keys, default=None):
        """
        Get a nested config value by key path.
        e.g. config.get('extraction', 'chunk_size_kb')
        """
        value = self._config
        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default
        return value

    def set(self, *keys_and_value):
        """
        Set a nested config value.
        e.g. config.set('progress', 'enabled', False)
        """
        *keys, value = keys_and_value
        target = self._config
        for key in keys[:-1]:
            target = target.setdefault(key, {})
        target[keys[-1]] = value

    # ── Convenience properties ─────────────────────────────────────────────

    @property
    def chunk_size(self) -> int:
        return self.get('extraction', 'chunk_size_kb', default=64) * 1024

    @property
    def package_extension(self) -> str:
        return self.get('extraction', 'package_extension', default='.unitypackage')

    @property
    def encoding_detection(self) -> bool:
        return self.get('extraction', 'encoding_detection', default=True)

    @property
    def max_workers(self):
        return self.get('batch', 'max_workers', default=None)

    @property
    def progress_enabled(self) -> bool:
        return self.get('progress', 'enabled', default=True)

    @property
    def progress_min_size(self) -> int:
        return int(self.get('progress', 'min_archive_size_mb', default=1) * 1024 * 1024)

    @property
    def bar_width(self) -> int:
        return self.get('progress', 'bar_width', default=50)

    @property
    def output_dir(self) -> str:
        return self.get('storage', 'output_dir', default='.')

    # ── Helpers ────────────────────────────────────────────────────────────

    @staticmethod
    def _deep_merge(base: dict, override: dict):
        """Merge override into base recursively — modifies base in place"""
        for key, value in override.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                ExtractorConfig._deep_merge(base[key], value)
            else:
                base[key] = value


# Singleton — import this everywhere
config = ExtractorConfig()

__all__ = ["ExtractorConfig", "config", "DEFAULTS"]
