"""Core domain types and logic."""

from .config import Config, ConfigError, initialize_config, load_config
from .errors import ErrorCode
from .result import Err, Ok, Result
from .verbosity import Verbosity

__all__ = [
    # config
    "Config",
    "ConfigError",
    "initialize_config",
    "load_config",
    # errors
    "ErrorCode",
    # result
    "Err",
    "Ok",
    "Result",
    # verbosity
    "Verbosity",
]
