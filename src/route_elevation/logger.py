"""Zentrales Logging-Modul für Route Elevation.

Konsole erhält nur Warnungen und Fehler (z.B. fehlgeschlagene Analysen),
die Log-Datei alles ab dem konfigurierten Level.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _defaults_from_config() -> tuple[int, Optional[Path]]:
    """Liest Level und Log-Datei (mit Timestamp) aus der Konfiguration."""
    from .config import get_config

    config = get_config()
    level = getattr(logging, config.logging.level.upper(), logging.INFO)

    if not config.logging.file:
        return level, None

    base_log_path = Path(config.logging.file)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M")
    return level, base_log_path.parent / f"{base_log_path.stem}_{timestamp}.log"


def setup_logger(
    name: str = "route_elevation",
    level: int = None,
    log_file: Optional[Path] = None,
    console_output: bool = True,
) -> logging.Logger:
    """Konfiguriert und gibt einen Logger zurück.

    Args:
        name: Name des Loggers (Default: "route_elevation").
        level: Logging-Level. Falls None, wird config.logging.level verwendet.
        log_file: Pfad zur Log-Datei. Falls None, wird config.logging.file
                 verwendet; ist dort nichts gesetzt, wird nicht in eine Datei geloggt.
        console_output: Wenn True, werden Warnungen zusätzlich auf stdout ausgegeben.

    Returns:
        Konfigurierter Logger. Ein bereits konfigurierter Logger wird nur im
        Level angepasst, es kommen keine weiteren Handler hinzu.

    Example:
        >>> logger = setup_logger(log_file=Path("logs/analyse.log"))
        >>> logger.debug("3 Abschnitte erzeugt")
    """
    if level is None or log_file is None:
        config_level, config_log_file = _defaults_from_config()
        level = config_level if level is None else level
        log_file = config_log_file if log_file is None else log_file

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Verhindere doppelte Handler wenn Logger mehrfach aufgerufen wird
    if logger.handlers:
        return logger

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    if console_output:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.WARNING)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str = "route_elevation") -> logging.Logger:
    """Gibt einen existierenden Logger zurück oder erstellt ihn mit Config-Werten.

    Example:
        >>> from route_elevation.logger import get_logger
        >>> logger = get_logger()
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        logger = setup_logger(name)

    return logger


def set_log_level(level: int, name: str = "route_elevation") -> None:
    """Setzt das Level des Loggers und seiner Datei-Handler (z.B. für --debug)."""
    logger = logging.getLogger(name)
    logger.setLevel(level)
    for handler in logger.handlers:
        if isinstance(handler, logging.FileHandler):
            handler.setLevel(level)
