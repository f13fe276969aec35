"""
Configuration Module for the Fiscal QR Extraction System.

Runtime knobs (logging, page rendering, OCR profile, QR backend, batch
workers) are read from a YAML file once per process. Fiscal defaults such
as the generic consumer NIF are fixed in code, not configured.

Usage:
    from config import ConfigurationManager, get_config

    ConfigurationManager("custom.yaml")      # optional, before first use
    scale = get_config("input.pdf.render_scale", 2.0)
"""

import copy
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

DEFAULT_CONFIG_PATH = Path(__file__).parent / "settings.yaml"
PROJECT_ROOT = Path(__file__).parent.parent


def _absolutize_log_path(config: Dict[str, Any]) -> None:
    """Anchor a relative logging.file.path at the project root."""
    file_section = (config.get('logging') or {}).get('file') or {}
    path = file_section.get('path')
    if path and not Path(path).is_absolute():
        file_section['path'] = str(PROJECT_ROOT / path)


class ConfigurationManager:
    """
    Process-wide YAML configuration (singleton).

    The first instantiation decides the file; later calls return the same
    instance and ignore their argument until reset() is called.

    Attributes:
        config_path: File the configuration was read from.

    Example:
        >>> config = ConfigurationManager()
        >>> config.get("ocr.tesseract.lang")
        'por+eng'
        >>> config.get("qr.missing", "fallback")
        'fallback'
    """

    _instance: Optional['ConfigurationManager'] = None

    def __new__(cls, config_path: Optional[str] = None) -> 'ConfigurationManager':
        if cls._instance is None:
            instance = super().__new__(cls)
            instance._loaded = False
            cls._instance = instance
        return cls._instance

    def __init__(self, config_path: Optional[str] = None) -> None:
        if self._loaded:
            return

        self.config_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
        self._config = self._read(self.config_path)
        self._loaded = True

    @staticmethod
    def _read(path: Path) -> Dict[str, Any]:
        """
        Parse a settings file.

        Raises:
            FileNotFoundError: If the file doesn't exist.
            ValueError: If the YAML root is not a mapping.
            yaml.YAMLError: If the file is not valid YAML.
        """
        if not path.is_file():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        with path.open('r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ValueError(f"Configuration root must be a mapping: {path}")

        _absolutize_log_path(data)
        return data

    def get(self, key: str, default: Any = None) -> Any:
        """Value at a dotted key such as "ocr.tesseract.psm", or default."""
        node: Any = self._config
        for part in key.split('.'):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node

    def get_all(self) -> Dict[str, Any]:
        return copy.deepcopy(self._config)

    def reload(self) -> None:
        """Re-read the configuration file."""
        self._config = self._read(self.config_path)

    @classmethod
    def reset(cls) -> None:
        """Forget the current instance; the next call loads again."""
        cls._instance = None


def get_config(key: str, default: Any = None) -> Any:
    """Shortcut for ConfigurationManager().get(key, default)."""
    return ConfigurationManager().get(key, default)


__all__ = ['ConfigurationManager', 'get_config']
