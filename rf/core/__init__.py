"""Core types shared by every layer."""

from .config import ConfigError, GitHubConfig, JiraConfig, TrackerConfig
from .errors import ErrorCode
from .result import Err, Ok, Result

__all__ = [
    # config
    "ConfigError",
    "GitHubConfig",
    "JiraConfig",
    "TrackerConfig",
    # errors
    "ErrorCode",
    # result
    "Err",
    "Ok",
    "Result",
]
