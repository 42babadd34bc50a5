"""Normalized path strings for fuzzy, case- and separator-insensitive comparison."""

from .fuzzy_path import FuzzyPath, normalize, lossy_path_text
from .serialization import dump_fuzzy_path, load_fuzzy_path, load_fuzzy_path_json
from .errors import FuzzyPathError, ConfigError
from .config import ConfigLoader, FuzzyPathConfig, LoggingConfig, OutputConfig
from .logging import setup_logging, LogContext

__all__ = [
    'FuzzyPath',
    'normalize',
    'lossy_path_text',
    'dump_fuzzy_path',
    'load_fuzzy_path',
    'load_fuzzy_path_json',
    'FuzzyPathError',
    'ConfigError',
    'ConfigLoader',
    'FuzzyPathConfig',
    'LoggingConfig',
    'OutputConfig',
    'setup_logging',
    'LogContext',
]
