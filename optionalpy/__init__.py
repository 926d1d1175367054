from .optional import Optional, NoSuchElementError
from .completion import of_completion, settle
from .result import Result, Ok, Err, from_optional as result_from_optional
from .logger import ConsoleLogger, get_logger, configure_logging

__all__ = [
    "Optional",
    "NoSuchElementError",
    "of_completion",
    "settle",
    "Result",
    "Ok",
    "Err",
    "result_from_optional",
    "ConsoleLogger",
    "get_logger",
    "configure_logging",
]
