"""
Configuration management for the EDF viewer.

This module provides centralized configuration management, supporting:
- Loading from JSON config files
- Environment variable overrides
- Validation of all settings
- The single place where logging is configured
"""

import os
import json
import logging
from dataclasses import dataclass, asdict
from typing import Optional, List
from pathlib import Path

from edf_viewer.constants import MAX_POINTS_PER_WAVE_DEFAULT, MAX_POINTS_PER_WAVE_MIN
from edf_viewer.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
VALID_LOG_LEVELS = {'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'}


def configure_logging(level: Optional[str] = None) -> int:
    """Configure root logging for the application.

    Args:
        level: Level name ('DEBUG', 'INFO', ...). Falls back to the LOG_LEVEL
               environment variable, then to 'INFO'.

    Returns:
        The numeric logging level that was applied
    """
    level_name = (level or os.environ.get('LOG_LEVEL') or 'INFO').upper()
    if level_name not in VALID_LOG_LEVELS:
        logger.warning(f"Unknown log level {level_name!r}, using INFO")
        level_name = 'INFO'
    numeric_level = getattr(logging, level_name)

    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=numeric_level, format=LOG_FORMAT)
    else:
        # Already configured (e.g. by a host application or pytest): only adjust the level
        root.setLevel(numeric_level)
    return numeric_level


@dataclass
class ViewerSettings:
    """Windowing and decimation settings.

    Attributes:
        max_points_per_wave: Point budget for one rendered channel window
        visible_seconds: Seconds of signal viewed at once; None means one raw
                         sample per point (span equals the point budget)
    """
    max_points_per_wave: int = MAX_POINTS_PER_WAVE_DEFAULT
    visible_seconds: Optional[float] = None

    def validate(self) -> List[str]:
        """Validate settings and return list of error messages (empty if valid)."""
        errors = []
        if not isinstance(self.max_points_per_wave, int) or self.max_points_per_wave < MAX_POINTS_PER_WAVE_MIN:
            errors.append(f"Max points per wave must be an integer >= {MAX_POINTS_PER_WAVE_MIN}")
        if self.visible_seconds is not None:
            if not isinstance(self.visible_seconds, (int, float)) or self.visible_seconds <= 0:
                errors.append("Visible seconds must be a positive number or None")
        return errors


@dataclass
class AppSettings:
    """Application-level configuration settings.

    Attributes:
        log_level: Logging level ('DEBUG', 'INFO', 'WARNING', 'ERROR')
        data_dir: Directory searched for relative recording paths
    """
    log_level: str = 'INFO'
    data_dir: Optional[str] = None

    def validate(self) -> List[str]:
        """Validate settings and return list of error messages (empty if valid)."""
        errors = []
        if not isinstance(self.log_level, str) or self.log_level.upper() not in VALID_LOG_LEVELS:
            errors.append(f"Log level must be one of {sorted(VALID_LOG_LEVELS)}")
        if self.data_dir is not None and not isinstance(self.data_dir, str):
            errors.append("Data directory must be a string path or None")
        return errors

    def resolve_path(self, path: str) -> str:
        """Resolve a recording path against data_dir when it is relative."""
        if self.data_dir and not os.path.isabs(path):
            return os.path.join(self.data_dir, path)
        return path


class ConfigManager:
    """Centralized configuration manager for the EDF viewer.

    Settings are loaded from multiple sources with priority:
    1. JSON config file (highest priority)
    2. Environment variables
    3. Default values (lowest priority)

    Attributes:
        viewer_settings: Windowing and decimation configuration
        app_settings: Application-level configuration
        _config_file: Path to JSON config file (if loaded)
    """

    def __init__(self, config_file: Optional[str] = None, search_default_locations: bool = True):
        """Initialize ConfigManager.

        Args:
            config_file: Optional path to JSON config file. If None, will try:
                        - ~/.edf_viewer/config.json (user config)
                        - ./edf_viewer.json (project config)
            search_default_locations: Set False to skip the default file lookup
        """
        self.viewer_settings = ViewerSettings()
        self.app_settings = AppSettings()
        self._config_file: Optional[str] = None

        self._load_from_environment()
        if config_file:
            if not self._load_from_file(config_file):
                raise ConfigurationError(f"Could not load config file {config_file}",
                                         setting_name='config_file', setting_value=config_file,
                                         expected='readable JSON file')
        elif search_default_locations:
            self._load_from_default_locations()

        errors = self.validate()
        if errors:
            logger.warning(f"Configuration validation errors: {errors}")

    @property
    def config_file(self) -> Optional[str]:
        return self._config_file

    def _load_from_environment(self) -> None:
        """Load configuration from environment variables."""
        max_points = os.environ.get('EDF_MAX_POINTS_PER_WAVE')
        if max_points:
            try:
                self.viewer_settings.max_points_per_wave = int(max_points)
            except (ValueError, TypeError):
                logger.warning(f"Invalid EDF_MAX_POINTS_PER_WAVE environment variable: {max_points}")

        visible = os.environ.get('EDF_VISIBLE_SECONDS')
        if visible:
            try:
                self.viewer_settings.visible_seconds = float(visible)
            except (ValueError, TypeError):
                logger.warning(f"Invalid EDF_VISIBLE_SECONDS environment variable: {visible}")

        data_dir = os.environ.get('EDF_DATA_DIR')
        if data_dir:
            self.app_settings.data_dir = data_dir

        log_level = os.environ.get('LOG_LEVEL')
        if log_level:
            self.app_settings.log_level = log_level.upper()

    def _load_from_file(self, file_path: str) -> bool:
        """Load configuration from JSON file.

        Args:
            file_path: Path to JSON config file

        Returns:
            True if loaded successfully, False otherwise
        """
        if not os.path.exists(file_path):
            logger.debug(f"Config file not found: {file_path}")
            return False

        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except ValueError as e:  # JSONDecodeError, UnicodeDecodeError
            logger.error(f"Failed to parse config file {file_path}: {e}")
            return False
        except OSError as e:
            logger.error(f"Failed to read config file {file_path}: {e}")
            return False

        if not isinstance(data, dict):
            logger.error(f"Config file {file_path} must contain a JSON object, got {type(data).__name__}")
            return False
        for section in ('viewer_settings', 'app_settings'):
            if section in data and not isinstance(data[section], dict):
                logger.error(f"Section {section!r} in {file_path} must be a JSON object, "
                             f"got {type(data[section]).__name__}")
                return False

        if 'viewer_settings' in data:
            viewer_data = data['viewer_settings']
            if 'max_points_per_wave' in viewer_data:
                try:
                    self.viewer_settings.max_points_per_wave = int(viewer_data['max_points_per_wave'])
                except (ValueError, TypeError):
                    logger.warning(f"Invalid max_points_per_wave in config: {viewer_data['max_points_per_wave']}")
            if 'visible_seconds' in viewer_data:
                value = viewer_data['visible_seconds']
                try:
                    self.viewer_settings.visible_seconds = None if value is None else float(value)
                except (ValueError, TypeError):
                    logger.warning(f"Invalid visible_seconds in config: {value}")

        if 'app_settings' in data:
            app_data = data['app_settings']
            if 'log_level' in app_data:
                self.app_settings.log_level = str(app_data['log_level']).upper()
            if 'data_dir' in app_data:
                self.app_settings.data_dir = app_data['data_dir']

        self._config_file = file_path
        logger.info(f"Loaded configuration from {file_path}")
        return True

    def _load_from_default_locations(self) -> None:
        """Try loading from default config file locations."""
        user_config_file = Path.home() / '.edf_viewer' / 'config.json'
        if user_config_file.exists():
            self._load_from_file(str(user_config_file))
            return

        project_config_file = Path.cwd() / 'edf_viewer.json'
        if project_config_file.exists():
            self._load_from_file(str(project_config_file))

    def save_to_file(self, file_path: Optional[str] = None) -> bool:
        """Save current configuration to JSON file.

        Args:
            file_path: Optional path to save to. If None, uses _config_file or creates user config.

        Returns:
            True if saved successfully, False otherwise
        """
        save_path = file_path or self._config_file
        if not save_path:
            user_config_dir = Path.home() / '.edf_viewer'
            user_config_dir.mkdir(exist_ok=True)
            save_path = str(user_config_dir / 'config.json')

        data = {
            'viewer_settings': asdict(self.viewer_settings),
            'app_settings': asdict(self.app_settings),
        }
        # Remove None values
        for section in data.values():
            for key in list(section.keys()):
                if section[key] is None:
                    del section[key]

        try:
            directory = os.path.dirname(save_path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(save_path, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2)
        except OSError as e:
            logger.error(f"Failed to save config file {save_path}: {e}", exc_info=True)
            return False

        self._config_file = save_path
        logger.info(f"Saved configuration to {save_path}")
        return True

    def validate(self) -> List[str]:
        """Validate all configuration settings.

        Returns:
            List of error messages (empty if all valid)
        """
        errors = []
        errors.extend(self.viewer_settings.validate())
        errors.extend(self.app_settings.validate())
        return errors

    def require_valid(self) -> None:
        """Raise ConfigurationError if any setting is invalid."""
        errors = self.validate()
        if errors:
            raise ConfigurationError("; ".join(errors), expected='valid viewer and app settings')
