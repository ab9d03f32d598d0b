"""
Engine configuration model

Typed view of config/engine.yaml. Built by ConfigManager; every field has a
default so a missing or partial YAML file still yields a usable config.
"""

from dataclasses import dataclass

from models.enums import LogLevel, PathMode


@dataclass(frozen=True)
class EngineConfig:
    """
    Defaults for motion sessions and the logger

    Attributes:
        path_mode: Default path shape when configure() gets none
        easing: Default easing name/expression
        duration_ms: Default session duration
        parent_width, parent_height: Default container size (pixels)
        log_level: Minimum level for the structured logger
        log_colors: ANSI colors in log output
    """

    path_mode: PathMode = PathMode.LINEAR
    easing: str = "linear"
    duration_ms: int = 300
    parent_width: int = 0
    parent_height: int = 0
    log_level: LogLevel = LogLevel.INFO
    log_colors: bool = True
