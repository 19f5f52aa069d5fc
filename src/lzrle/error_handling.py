"""
Standardized Error Handling for lzrle
=====================================

This module provides the codec exception hierarchy and consistent error
handling helpers shared by the dispatch layer and the command-line tool.
"""

import functools
import logging
import time
import traceback
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Type, Union

logger = logging.getLogger(__name__)


class CodecError(Exception):
    """Base exception for all codec-related errors."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        self.context = context or {}
        super().__init__(message)

        # Log error with context for debugging
        context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
        logger.error(
            f"Codec error: {message}" + (f" ({context_str})" if context_str else "")
        )


class MalformedStreamError(CodecError):
    """Raised in strict mode when a compressed stream ends mid-token."""

    pass


class CorruptStreamError(CodecError):
    """Raised when an LZ77 back-reference points before the start of the output."""

    pass


class CodecConfigurationError(CodecError):
    """Raised when codec configuration is invalid."""

    pass


class AlgorithmResolutionError(CodecError):
    """Raised when an automatic algorithm selector cannot be resolved."""

    pass


class DetectionUnavailableError(CodecError):
    """Raised when the file-type heuristic is requested but not available."""

    pass


class CodecIntegrityError(CodecError):
    """Raised when round-trip verification of compressed data fails."""

    pass


class CodecIOError(CodecError):
    """Raised when reading input or writing output fails."""

    pass


def with_error_handling(
    error_type: Type[CodecError] = CodecError,
    context: Optional[Dict[str, Any]] = None,
):
    """
    Decorator for standardized error handling in codec operations.

    Args:
        error_type: Type of CodecError to raise
        context: Additional context to include in error
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except CodecError:
                # Re-raise codec errors as-is
                raise
            except Exception as e:
                error_context = (context or {}).copy()
                error_context.update(
                    {
                        "function": func.__name__,
                        "args_count": len(args),
                        "kwargs_keys": list(kwargs.keys()),
                        "original_error": str(e),
                        "original_error_type": type(e).__name__,
                    }
                )

                error_msg = f"Error in {func.__name__}: {e}"
                raise error_type(error_msg, error_context) from e

        return wrapper

    return decorator


@contextmanager
def codec_operation_context(operation: str, **context):
    """
    Context manager for codec operations with standardized logging.

    Args:
        operation: Description of the operation
        **context: Additional context for logging
    """
    logger.debug(f"Starting codec operation: {operation}", extra=context)
    start_time = time.time()

    try:
        yield
        duration = time.time() - start_time
        logger.debug(
            f"Codec operation completed: {operation} ({duration:.3f}s)",
            extra=context,
        )
    except CodecError:
        logger.error(f"Codec operation failed: {operation}", extra=context)
        raise
    except Exception as e:
        logger.error(
            f"Unexpected error in codec operation: {operation} - {e}", extra=context
        )
        raise


def validate_file_path(file_path: Union[str, Path], must_exist: bool = False) -> Path:
    """
    Validate and normalize file paths with proper error handling.

    Args:
        file_path: File path to validate
        must_exist: Whether the file must already exist

    Returns:
        Validated Path object

    Raises:
        CodecIOError: If path validation fails
    """
    path = Path(file_path)

    if not path.name:
        raise CodecIOError(
            "Invalid file path: empty filename", {"file_path": str(file_path)}
        )

    if must_exist and not path.exists():
        raise CodecIOError(
            f"Required file does not exist: {path}", {"file_path": str(file_path)}
        )

    if not must_exist and not path.parent.is_dir():
        raise CodecIOError(
            f"Output directory does not exist: {path.parent}",
            {"file_path": str(file_path)},
        )

    return path


def safe_file_operation(
    operation: str, file_path: Path, func: Callable, *args, **kwargs
):
    """
    Perform file operations, converting OS failures to CodecIOError.

    Args:
        operation: Description of the operation
        file_path: File being operated on
        func: Function to call
        *args, **kwargs: Arguments for the function

    Returns:
        Result of the function call
    """
    with codec_operation_context(operation, file_path=str(file_path)):
        try:
            return func(*args, **kwargs)
        except PermissionError as e:
            raise CodecIOError(
                f"Permission denied for {operation}: {file_path}",
                {"operation": operation, "file_path": str(file_path)},
            ) from e
        except OSError as e:
            raise CodecIOError(
                f"File system error during {operation}: {e}",
                {"operation": operation, "file_path": str(file_path)},
            ) from e


class ErrorSummary:
    """Collects errors from a batch of codec operations."""

    def __init__(self):
        self.errors = []
        self.warnings = []

    def add_error(self, error: Exception, context: Optional[Dict[str, Any]] = None):
        """Add an error to the summary."""
        self.errors.append(
            {
                "error": error,
                "type": type(error).__name__,
                "message": str(error),
                "context": context or {},
                "traceback": traceback.format_exc(),
            }
        )

    def add_warning(self, message: str, context: Optional[Dict[str, Any]] = None):
        """Add a warning to the summary."""
        self.warnings.append({"message": message, "context": context or {}})

    def has_errors(self) -> bool:
        return len(self.errors) > 0

    def has_warnings(self) -> bool:
        return len(self.warnings) > 0

    def log_summary(self):
        """Log a summary of all errors and warnings."""
        if self.has_errors():
            logger.error(f"Batch completed with {len(self.errors)} error(s)")
            for i, error_info in enumerate(self.errors, 1):
                logger.error(
                    f"Error {i}: {error_info['type']}: {error_info['message']}"
                )

        if self.has_warnings():
            logger.warning(f"Batch completed with {len(self.warnings)} warning(s)")
            for i, warning_info in enumerate(self.warnings, 1):
                logger.warning(f"Warning {i}: {warning_info['message']}")

        if not self.has_errors() and not self.has_warnings():
            logger.info("Batch completed successfully with no errors or warnings")
