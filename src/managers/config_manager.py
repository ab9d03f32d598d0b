"""
Config Manager

Engine configuration with include system support.
Loads modular YAML files and builds the typed EngineConfig plus any
keyframe presets declared in YAML.
"""

import yaml
from pathlib import Path
from typing import Any, Dict, List

from models.config import EngineConfig
from models.enums import LogLevel, LogCategory, PathMode
from models.keyframes import BaseKeyframe
from models.transition import parse_easing
from utils.logger import get_logger, configure_logger
from utils.serialization import Serializer

log = get_logger().for_category(LogCategory.CONFIG)


class ConfigManager:
    """
    Engine configuration manager with include system support

    Loads engine.yaml and processes the include: directive to load modular
    YAML files. Falls back to factory_defaults.yaml when the main file
    cannot be loaded, and to EngineConfig defaults when neither can.

    Example:
        config = ConfigManager()
        config.load()

        engine_config = config.get_engine_config()
        keyframes = config.get_keyframes("fade_in")
    """

    def __init__(self, config_path="config/engine.yaml", defaults_path="config/factory_defaults.yaml"):
        """
        Initialize ConfigManager

        Args:
            config_path: Path to main engine.yaml (relative to src/, or absolute)
            defaults_path: Path to factory defaults fallback
        """
        self.config_path = Path(config_path)
        self.factory_defaults_path = Path(defaults_path)
        self.data: Dict[str, Any] = {}

    def load(self) -> Dict[str, Any]:
        """
        Load YAML configuration with include system support

        Process:
        1. Load main engine.yaml
        2. If it has 'include:' list, load and merge those files
        3. Otherwise treat as monolithic config
        4. Fallback to factory defaults on failure, then to an empty config

        Returns:
            Merged config data dict
        """
        # Resolve paths relative to src/ directory
        src_dir = Path(__file__).parent.parent

        try:
            full_path = src_dir / self.config_path
            main_config = self._read_yaml(full_path)

            if 'include' in main_config:
                log.info("Using include-based configuration")
                self.data = self._load_with_includes(main_config['include'], full_path.parent)
            else:
                log.info("Using monolithic configuration")
                self.data = main_config

        except Exception as ex:
            log.error(f"Failed to load {self.config_path.name}", error=str(ex), error_type=type(ex).__name__)
            log.warn("Falling back to factory defaults")

            try:
                self.data = self._read_yaml(src_dir / self.factory_defaults_path)
            except Exception as ex:
                log.error("Failed to load factory defaults, using built-in defaults", error=str(ex))
                self.data = {}

        return self.data

    @staticmethod
    def _read_yaml(path: Path) -> Dict[str, Any]:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ValueError(f"{path.name}: top level must be a mapping")
        return data

    def _load_with_includes(self, include_list: List[str], config_dir: Path) -> Dict[str, Any]:
        """
        Load and merge multiple YAML files from include list

        Args:
            include_list: List of filenames to load (e.g., ["motion.yaml", "logging.yaml"])
            config_dir: Directory containing config files

        Returns:
            Merged config dict (later files override earlier top-level keys)
        """
        merged: Dict[str, Any] = {}

        for filename in include_list:
            filepath = config_dir / filename
            try:
                file_data = self._read_yaml(filepath)
                if file_data:
                    merged.update(file_data)
                    log.info(f"Loaded {filename}", keys=str(list(file_data.keys())))
            except FileNotFoundError:
                log.error(f"File not found: {filename}")
                raise
            except Exception as ex:
                log.error(f"Error loading {filename}", error=str(ex))
                raise

        log.info("Config merge complete", total_keys=len(merged), keys=str(list(merged.keys())[:10]))
        return merged

    # ===== Typed access =====

    def get_engine_config(self) -> EngineConfig:
        """
        Build EngineConfig from the loaded data

        Invalid values are logged and replaced by the dataclass default,
        field by field.

        Returns:
            EngineConfig (defaults for anything missing)
        """
        defaults = EngineConfig()
        motion = self.data.get("motion") or {}
        parent = motion.get("parent") or {}
        logging_cfg = self.data.get("logging") or {}

        path_mode = self._parse_enum(motion.get("path_mode"), PathMode, defaults.path_mode, "motion.path_mode")
        log_level = self._parse_enum(logging_cfg.get("level"), LogLevel, defaults.log_level, "logging.level")

        easing = str(motion.get("easing") or defaults.easing)
        try:
            parse_easing(easing)
        except ValueError as ex:
            log.error("Invalid easing in config, using default", error=str(ex), default=defaults.easing)
            easing = defaults.easing

        config = EngineConfig(
            path_mode=path_mode,
            easing=easing,
            duration_ms=self._parse_int(motion.get("duration_ms"), defaults.duration_ms, "motion.duration_ms"),
            parent_width=self._parse_int(parent.get("width"), defaults.parent_width, "motion.parent.width"),
            parent_height=self._parse_int(parent.get("height"), defaults.parent_height, "motion.parent.height"),
            log_level=log_level,
            log_colors=bool(logging_cfg.get("colors", defaults.log_colors)),
        )
        log.info(
            "Engine config ready",
            path=config.path_mode.name,
            easing=config.easing,
            duration_ms=config.duration_ms,
            parent=f"{config.parent_width}x{config.parent_height}",
        )
        return config

    def apply_logging(self, config: EngineConfig) -> None:
        """Push log level/colors from config into the logger singleton"""
        configure_logger(config.log_level, config.log_colors)

    def get_keyframes(self, preset: str) -> List[BaseKeyframe]:
        """
        Keyframes of a named preset under the 'keyframes:' section

        Invalid entries are logged and skipped.

        Args:
            preset: Preset name (e.g. "fade_in")

        Returns:
            List of keyframes (empty if the preset does not exist)
        """
        presets = self.data.get("keyframes") or {}
        entries = presets.get(preset)
        if not entries:
            log.warn(f"Keyframe preset not found: {preset}")
            return []

        keyframes = []
        for entry in entries:
            try:
                keyframes.append(Serializer.dict_to_keyframe(entry))
            except (KeyError, ValueError, TypeError) as e:
                log.error(f"Invalid keyframe entry: {entry}, error: {e}")
                continue

        log.info(f"Loaded {len(keyframes)} keyframes for preset {preset}")
        return keyframes

    def get_keyframe_presets(self) -> List[str]:
        return list((self.data.get("keyframes") or {}).keys())

    # ===== Helpers =====

    @staticmethod
    def _parse_enum(value, enum_type, default, key: str):
        if value is None:
            return default
        try:
            return Serializer.str_to_enum(str(value), enum_type)
        except ValueError as ex:
            log.error(f"Invalid {key}, using default", error=str(ex), default=default.name)
            return default

    @staticmethod
    def _parse_int(value, default: int, key: str) -> int:
        if value is None:
            return default
        try:
            return int(value)
        except (TypeError, ValueError):
            log.error(f"Invalid {key}, using default", value=repr(value), default=default)
            return default
