"""Core types: results, exit codes, configuration."""

from .config import ConfigError, GitHubRepo, ReleaseConfig, TriggerInfo, load_release_config
from .errors import ErrorCode
from .result import Err, Ok, Result

__all__ = [
    # config
    "ConfigError",
    "GitHubRepo",
    "ReleaseConfig",
    "TriggerInfo",
    "load_release_config",
    # errors
    "ErrorCode",
    # result
    "Err",
    "Ok",
    "Result",
]
