"""
Central configuration for search and board tunables.
Pydantic models provide type-safe, validated configuration management.
"""
from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from connect4.types import DEFAULT_COLUMNS, DEFAULT_DEPTH, DEFAULT_ROWS


class SearchSettings(BaseModel):
    """Search engine configuration settings."""

    default_depth: int = Field(default=DEFAULT_DEPTH, ge=0, le=12, description="Default search depth in plies")
    algorithm: str = Field(default="alphabeta", description="Search algorithm (alphabeta or minimax)")

    @field_validator('default_depth', mode='before')
    @classmethod
    def validate_int_fields(cls, v):
        return int(v)

    @field_validator('algorithm', mode='before')
    @classmethod
    def validate_algorithm(cls, v):
        valid = ['alphabeta', 'minimax']
        v_lower = str(v).strip().lower()
        if v_lower not in valid:
            raise ValueError(f"algorithm must be one of {valid}")
        return v_lower


class BoardSettings(BaseModel):
    """Board dimensions used when creating empty positions."""

    rows: int = Field(default=DEFAULT_ROWS, ge=4, le=12, description="Number of rows")
    columns: int = Field(default=DEFAULT_COLUMNS, ge=4, le=12, description="Number of columns")

    @field_validator('rows', 'columns', mode='before')
    @classmethod
    def validate_int_fields(cls, v):
        return int(v)


class LoggingSettings(BaseModel):
    """Logging configuration."""

    log_level: str = Field(default="INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR)")
    log_to_file: bool = Field(default=False, description="Write logs to file")
    log_file_path: str = Field(default="connect4.log", description="Log file path")

    @field_validator('log_level', mode='before')
    @classmethod
    def validate_log_level(cls, v):
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR']
        v_upper = v.upper() if isinstance(v, str) else str(v).upper()
        if v_upper not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return v_upper


class Connect4Config(BaseModel):
    """Main configuration model."""

    search: SearchSettings = Field(default_factory=SearchSettings)
    board: BoardSettings = Field(default_factory=BoardSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    # Metadata
    version: str = Field(default="1.0.0", description="Configuration version")
    config_file: Optional[str] = Field(default=None, description="Path to config file")

    @classmethod
    def from_env(cls) -> 'Connect4Config':
        """Create configuration from environment variables."""
        return cls(
            search=SearchSettings(
                default_depth=os.getenv('CONNECT4_DEPTH', str(DEFAULT_DEPTH)),
                algorithm=os.getenv('CONNECT4_ALGORITHM', 'alphabeta'),
            ),
            board=BoardSettings(
                rows=os.getenv('CONNECT4_ROWS', str(DEFAULT_ROWS)),
                columns=os.getenv('CONNECT4_COLUMNS', str(DEFAULT_COLUMNS)),
            ),
            logging=LoggingSettings(
                log_level=os.getenv('CONNECT4_LOG_LEVEL', 'INFO'),
                log_to_file=os.getenv('CONNECT4_LOG_FILE', 'false').lower() == 'true',
            ),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            'search': self.search.model_dump(),
            'board': self.board.model_dump(),
            'logging': self.logging.model_dump(),
            'version': self.version,
            'config_file': self.config_file,
        }

    def save_to_file(self, filepath: str) -> None:
        """Save configuration to JSON file."""
        config_dict = self.to_dict()
        config_dict['config_file'] = filepath

        with open(filepath, 'w') as f:
            json.dump(config_dict, f, indent=2)

    @classmethod
    def load_from_file(cls, filepath: str) -> 'Connect4Config':
        """Load configuration from JSON file."""
        with open(filepath, 'r') as f:
            data = json.load(f)

        return cls(
            search=SearchSettings(**data.get('search', {})),
            board=BoardSettings(**data.get('board', {})),
            logging=LoggingSettings(**data.get('logging', {})),
            version=data.get('version', '1.0.0'),
            config_file=filepath,
        )

    def update_from_dict(self, updates: Dict[str, Any]) -> None:
        """Update configuration sections from a nested dictionary.

        Each section is re-validated, so bad values raise ValidationError.
        """
        for section, settings in updates.items():
            if hasattr(self, section) and isinstance(settings, dict):
                section_model = getattr(self, section)
                merged = {**section_model.model_dump(), **settings}
                setattr(self, section, type(section_model)(**merged))


# Global configuration instance
_config: Optional[Connect4Config] = None


def get_config() -> Connect4Config:
    """Get or create the global configuration instance."""
    global _config
    if _config is None:
        _config = Connect4Config.from_env()
    return _config


def load_config_from_file(filepath: str) -> Connect4Config:
    """Load configuration from file and update global instance."""
    global _config
    _config = Connect4Config.load_from_file(filepath)
    return _config


def reset_config() -> None:
    """Reset the global configuration to defaults."""
    global _config
    _config = None


# Convenience functions for common configuration access
def get_search_settings() -> SearchSettings:
    """Get search configuration settings."""
    return get_config().search


def get_board_settings() -> BoardSettings:
    """Get board configuration settings."""
    return get_config().board


def get_logging_settings() -> LoggingSettings:
    """Get logging configuration settings."""
    return get_config().logging


def setup_logging() -> None:
    """Configure root logging once, controlled by the logging settings."""
    if getattr(setup_logging, "_configured", False):
        return
    settings = get_logging_settings()
    level: int = getattr(logging, settings.log_level, logging.INFO)
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if settings.log_to_file:
        handlers.append(logging.FileHandler(settings.log_file_path))
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        handlers=handlers,
    )
    setup_logging._configured = True  # type: ignore[attr-defined]
