"""Result type used at the capture, settings and export boundaries."""

from typing import TypeVar, Generic, Union, Callable, Any
from dataclasses import dataclass
import logging

T = TypeVar('T')
E = TypeVar('E', bound=Exception)


@dataclass
class Success(Generic[T]):
    """Represents a successful result."""
    value: T

    def is_success(self) -> bool:
        return True

    def is_error(self) -> bool:
        return False

    def unwrap(self) -> T:
        """Get the success value."""
        return self.value

    def unwrap_or(self, default: T) -> T:
        return self.value


@dataclass
class Error(Generic[E]):
    """Represents an error result."""
    error: E

    def is_success(self) -> bool:
        return False

    def is_error(self) -> bool:
        return True

    def unwrap(self) -> Any:
        """Raise the wrapped error."""
        raise self.error

    def unwrap_or(self, default: T) -> T:
        return default


Result = Union[Success[T], Error[E]]


def success(value: T) -> Success[T]:
    """Create a successful result."""
    return Success(value)


def error(err: E) -> Error[E]:
    """Create an error result."""
    return Error(err)


def safe_call(func: Callable[..., T], *args, **kwargs) -> Result[T, Exception]:
    """
    Call a function and wrap its outcome in a Result.

    Args:
        func: Function to call
        *args: Positional arguments
        **kwargs: Keyword arguments

    Returns:
        Success with return value or Error with the raised exception
    """
    try:
        return success(func(*args, **kwargs))
    except Exception as e:
        logging.debug(f"safe_call caught exception: {e}")
        return error(e)


def safe_call_with_log(func: Callable[..., T], operation_name: str,
                       *args, **kwargs) -> Result[T, Exception]:
    """Like safe_call, but logs the start, completion and failure of the operation."""
    try:
        logging.debug(f"Starting operation: {operation_name}")
        value = func(*args, **kwargs)
        logging.debug(f"Operation completed successfully: {operation_name}")
        return success(value)
    except Exception as e:
        logging.error(f"Operation failed: {operation_name} - {e}")
        return error(e)
