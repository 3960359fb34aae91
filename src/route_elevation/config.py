"""Konfigurations-Management für Route Elevation.

Lädt Konfiguration aus YAML-Datei mit Fallback auf Default-Werte.
"""

import copy
from pathlib import Path
from typing import Any

import yaml


class Config:
    """Zentrale Konfigurations-Klasse.

    Lädt Konfiguration aus config.yaml oder verwendet Defaults.

    Example:
        >>> config = Config()
        >>> print(config.get("analysis.segment_length_m"))
        1000
        >>> print(config.analysis.use_smoothing)
        True
    """

    DEFAULT_CONFIG = {
        "analysis": {
            "segment_length_m": 1000,
            "min_elevation_diff": 1.0,
            "use_smoothing": True,
            "smoothing_window": 10,
        },
        "directories": {"gpx": "gpx", "output": "output"},
        "logging": {"level": "INFO", "file": "logs/route_elevation.log"},
    }

    def __init__(self, config_path: Path = Path("config.yaml")):
        """Initialisiert Konfiguration.

        Args:
            config_path: Pfad zur YAML-Konfigurationsdatei (Default: config.yaml).
        """
        self._config = copy.deepcopy(self.DEFAULT_CONFIG)

        if config_path.exists():
            with open(config_path, encoding="utf-8") as f:
                user_config = yaml.safe_load(f) or {}
                self._merge_config(user_config)
        else:
            print(f"⚠️  Keine {config_path} gefunden, verwende Default-Konfiguration")

    def _merge_config(self, user_config: dict[str, Any]) -> None:
        """Merged User-Config mit Defaults (Deep Merge)."""

        def deep_merge(base: dict, override: dict) -> dict:
            result = base.copy()
            for key, value in override.items():
                if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                    result[key] = deep_merge(result[key], value)
                else:
                    result[key] = value
            return result

        self._config = deep_merge(self._config, user_config)

    def get(self, key: str, default: Any = None) -> Any:
        """Holt Konfigurations-Wert mit Dot-Notation.

        Args:
            key: Konfigurations-Key in Dot-Notation (z.B. "analysis.min_elevation_diff").
            default: Rückgabewert falls Key nicht existiert.

        Returns:
            Konfigurations-Wert oder default.

        Example:
            >>> config = Config()
            >>> config.get("analysis.smoothing_window")
            10
        """
        keys = key.split(".")
        value = self._config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    @property
    def analysis(self) -> "AnalysisConfig":
        """Zugriff auf Analyse-Parameter."""
        return AnalysisConfig(self._config["analysis"])

    @property
    def directories(self) -> "DirectoriesConfig":
        """Zugriff auf Verzeichnis-Konfiguration."""
        return DirectoriesConfig(self._config["directories"])

    @property
    def logging(self) -> "LoggingConfig":
        """Zugriff auf Logging-Konfiguration."""
        return LoggingConfig(self._config["logging"])


class AnalysisConfig:
    """Helper-Klasse für Analyse-Parameter."""

    def __init__(self, config: dict):
        self._config = config

    @property
    def segment_length_m(self) -> float:
        return float(self._config["segment_length_m"])

    @property
    def min_elevation_diff(self) -> float:
        return float(self._config["min_elevation_diff"])

    @property
    def use_smoothing(self) -> bool:
        return bool(self._config["use_smoothing"])

    @property
    def smoothing_window(self) -> int:
        return int(self._config["smoothing_window"])


class DirectoriesConfig:
    """Helper-Klasse für Verzeichnis-Zugriffe."""

    def __init__(self, config: dict):
        self._config = config

    @property
    def gpx(self) -> Path:
        return Path(self._config["gpx"])

    @property
    def output(self) -> Path:
        return Path(self._config["output"])


class LoggingConfig:
    """Helper-Klasse für Logging-Parameter."""

    def __init__(self, config: dict):
        self._config = config

    @property
    def level(self) -> str:
        return str(self._config["level"])

    @property
    def file(self) -> str | None:
        value = self._config.get("file")
        return str(value) if value else None


# Globale Config-Instanz
_global_config: Config = None


def get_config() -> Config:
    """Holt globale Konfigurations-Instanz (Singleton).

    Returns:
        Config-Instanz.
    """
    global _global_config
    if _global_config is None:
        _global_config = Config()
    return _global_config
