#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Habit Tracker - Configuration
Environment-driven configuration with validation
"""

import os
import sys
from pathlib import Path
from typing import Optional, Dict, Any
from dataclasses import dataclass
from enum import Enum

import pytz

class Environment(Enum):
    """Runtime environments"""
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"

class LogLevel(Enum):
    """Logging levels"""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

@dataclass
class StorageConfig:
    """Persistent store settings"""
    path: Path
    habits_key: str = "habits"
    theme_key: str = "theme"

@dataclass
class CalendarConfig:
    """Calendar day settings"""
    timezone: Optional[str] = None  # None = system local time
    window_days: int = 7

class TrackerConfig:
    """Main configuration class"""

    def __init__(self):
        self.environment = Environment(os.getenv('ENVIRONMENT', 'development'))
        self._load_config()
        self._validate_config()

    def _load_config(self):
        """Load configuration from environment variables"""
        self._load_errors = []

        # Directories
        self.data_dir = Path(os.getenv('DATA_DIR', 'data'))
        self.log_dir = Path(os.getenv('LOG_DIR', 'logs'))

        self.storage = StorageConfig(
            path=self.data_dir / os.getenv('STORE_FILE', 'habits_store.json')
        )

        self.calendar = CalendarConfig(
            timezone=os.getenv('TIMEZONE') or None,
            window_days=self._get_int_env('STATS_WINDOW_DAYS', 7)
        )

        # Logging
        self.log_level = LogLevel(os.getenv('LOG_LEVEL', 'INFO'))
        self.log_to_file = os.getenv('LOG_TO_FILE', 'false').lower() == 'true'
        self.log_format = os.getenv(
            'LOG_FORMAT',
            '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
        )

    def _get_int_env(self, key: str, default: int) -> int:
        """Read an integer variable, recording a load error when it is not numeric"""
        value = os.getenv(key)
        if value is None or value == '':
            return default
        try:
            return int(value)
        except ValueError:
            self._load_errors.append(f"{key} must be an integer, got '{value}'")
            return default

    def _validate_config(self):
        """Validate configuration"""
        errors = list(self._load_errors)

        if self.calendar.timezone:
            try:
                pytz.timezone(self.calendar.timezone)
            except pytz.UnknownTimeZoneError:
                errors.append(f"TIMEZONE '{self.calendar.timezone}' is not a known timezone")

        if self.calendar.window_days < 1:
            errors.append("STATS_WINDOW_DAYS must be a positive number")

        if not self.storage.path.name:
            errors.append("STORE_FILE must not be empty")

        if errors:
            raise ValueError("Configuration errors:\n" + "\n".join(f"• {error}" for error in errors))

    def ensure_directories(self):
        """Create required directories"""
        directories = [self.data_dir]
        if self.log_to_file:
            directories.append(self.log_dir)

        for directory in directories:
            directory.mkdir(parents=True, exist_ok=True)

    def get_logging_config(self) -> Dict[str, Any]:
        """Build a logging.config.dictConfig mapping"""
        handlers = ['console']
        if self.log_to_file:
            handlers.append('file')

        logging_config = {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {
                'default': {
                    'format': self.log_format,
                    'datefmt': '%Y-%m-%d %H:%M:%S'
                }
            },
            'handlers': {
                'console': {
                    'class': 'logging.StreamHandler',
                    'level': self.log_level.value,
                    'formatter': 'default',
                    'stream': sys.stdout
                }
            },
            'loggers': {
                '': {
                    'level': self.log_level.value,
                    'handlers': handlers,
                    'propagate': False
                }
            }
        }

        if self.log_to_file:
            logging_config['handlers']['file'] = {
                'class': 'logging.handlers.RotatingFileHandler',
                'level': self.log_level.value,
                'formatter': 'default',
                'filename': str(self.log_dir / f"habit_tracker_{self.environment.value}.log"),
                'maxBytes': 10485760,  # 10MB
                'backupCount': 5,
                'encoding': 'utf-8'
            }

        return logging_config

    def is_development(self) -> bool:
        return self.environment == Environment.DEVELOPMENT

    def is_production(self) -> bool:
        return self.environment == Environment.PRODUCTION

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to a dict"""
        return {
            'environment': self.environment.value,
            'store_path': str(self.storage.path),
            'timezone': self.calendar.timezone,
            'window_days': self.calendar.window_days,
            'log_level': self.log_level.value,
            'log_to_file': self.log_to_file
        }

# Global configuration instance
config = TrackerConfig()

__all__ = [
    'config',
    'TrackerConfig',
    'Environment',
    'LogLevel',
    'StorageConfig',
    'CalendarConfig'
]
