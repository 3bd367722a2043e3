"""Core types: results, errors, settings."""

from .config import Settings, load_settings
from .errors import ErrorCode, GvmError
from .result import Err, Ok, Result, is_err, is_ok

__all__ = [
    # config
    "Settings",
    "load_settings",
    # errors
    "ErrorCode",
    "GvmError",
    # result
    "Err",
    "Ok",
    "Result",
    "is_err",
    "is_ok",
]
