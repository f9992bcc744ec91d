"""
Centralized error handling utilities.

Errors are translated one layer at a time:

```
┌──────────────────────────────────────┐
│  CLI                                 │
│  - Formats error.user_message        │
│  - Shows error.recovery_hint         │
└──────────────────────────────────────┘
                  ↑ ChainDeckError
┌──────────────────────────────────────┐
│  CONTROLLER / NAVIGATION             │
│  - Catches collaborator exceptions   │
│  - Converts to ChainDeckError        │
│  - Keeps serving input if recoverable│
└──────────────────────────────────────┘
                  ↑ Exception, OSError, etc.
┌──────────────────────────────────────┐
│  TRANSPORT / RENDERER / MIDI         │
└──────────────────────────────────────┘
```

## Handling Patterns

| Pattern | Code |
|---------|------|
| Draw many buttons, report all failures | `collector = collect_errors("redraw"); with collector.try_operation("button 3"): ...` |
| Critical section with auto-logging | `with ErrorContext("open device"): ...` |
| Pydantic error to config error | `raise wrap_pydantic_error(e, str(path)) from e` |
| CLI output | `message, hint = format_error_for_display(e)` |
"""

import logging
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from typing import Any, Optional

from pydantic import ValidationError

from .base import ChainDeckError
from .config import ConfigValidationError

logger = logging.getLogger(__name__)


class ErrorContext:
    """
    Context manager for error handling with automatic logging.

    Example:
        ```python
        with ErrorContext("open device", re_raise=False) as ctx:
            handle = transport.open(path)

        if ctx.error:
            print(f"Failed: {ctx.error}")
        ```
    """

    def __init__(
        self,
        operation: str,
        logger_instance: Optional[logging.Logger] = None,
        re_raise: bool = True
    ):
        """
        Initialize error context.

        Args:
            operation: Description of the operation
            logger_instance: Logger to use (defaults to module logger)
            re_raise: Whether to re-raise exceptions
        """
        self.operation = operation
        self.logger = logger_instance or logger
        self.re_raise = re_raise
        self.error: Optional[Exception] = None

    def __enter__(self):
        self.logger.debug(f"Starting: {self.operation}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            self.logger.debug(f"Completed: {self.operation}")
            return False

        if not isinstance(exc_val, Exception):
            return False

        self.error = exc_val

        if isinstance(exc_val, ChainDeckError):
            self.logger.error(f"Failed to {self.operation}: {exc_val.technical_message}")
        else:
            self.logger.error(f"Failed to {self.operation}: {exc_val}", exc_info=True)

        return not self.re_raise


def wrap_pydantic_error(error: ValidationError, file_path: str) -> ConfigValidationError:
    """
    Convert a pydantic ValidationError from AppConfig into a ConfigValidationError.

    JSON syntax errors never get here; the config loader decodes the file
    itself and raises ConfigFileInvalidError.

    Args:
        error: The ValidationError raised by model_validate
        file_path: Path to the config file that failed validation
    """
    errors = error.errors()
    if not errors:
        return ConfigValidationError(field="unknown", value=None, error_msg=str(error), file_path=file_path)

    fields = [_field_name(err) for err in errors]
    if len(errors) == 1:
        return ConfigValidationError(
            field=fields[0],
            value=errors[0].get("input"),
            error_msg=errors[0].get("msg", "validation failed"),
            file_path=file_path,
        )

    details = "\n".join(
        f"  - {field}: {err.get('msg', 'validation failed')}" for field, err in zip(fields, errors)
    )
    return ConfigValidationError(
        field=", ".join(fields),
        value=None,
        error_msg=f"{len(errors)} validation errors:\n{details}",
        file_path=file_path,
    )


def _field_name(err: Mapping[str, Any]) -> str:
    return ".".join(str(loc) for loc in err.get("loc", ())) or "unknown"


def format_error_for_display(error: Exception) -> tuple[str, Optional[str]]:
    """
    Format an exception for user display.

    Args:
        error: The exception to format

    Returns:
        Tuple of (user_message, recovery_hint or None)
    """
    if isinstance(error, ChainDeckError):
        return error.user_message, error.recovery_hint

    error_type = type(error).__name__
    return f"{error_type}: {error}", None


def collect_errors(operation: str) -> "ErrorCollector":
    """
    Create an error collector for a redraw or other per-button batch.

    Example:
        ```python
        collector = collect_errors("redraw")

        for slot in slots:
            with collector.try_operation(f"button {slot.index}"):
                draw(slot)

        if collector.has_errors:
            logger.error(collector.get_summary())
        ```
    """
    return ErrorCollector(operation)


class ErrorCollector:
    """
    Records failures of independent steps so the remaining steps still run.

    Only Exception subclasses are recorded; KeyboardInterrupt and
    SystemExit pass through.
    """

    def __init__(self, operation: str):
        self.operation = operation
        self.errors: list[tuple[str, Exception]] = []
        self.success_count = 0

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    @property
    def error_count(self) -> int:
        return len(self.errors)

    @property
    def failed_steps(self) -> list[str]:
        """Names of the steps that raised, in order."""
        return [step for step, _ in self.errors]

    @contextmanager
    def try_operation(self, step: str) -> Iterator[None]:
        """Run one step; an exception is recorded instead of propagated."""
        try:
            yield
        except Exception as e:
            self.errors.append((step, e))
        else:
            self.success_count += 1

    def get_summary(self) -> str:
        """One line per failed step, or a success count."""
        if not self.errors:
            return f"All operations completed successfully ({self.success_count} total)"

        total = self.error_count + self.success_count
        lines = [f"Failed {self.error_count} of {total} operations ({self.operation}):"]
        for step, error in self.errors:
            message = error.user_message if isinstance(error, ChainDeckError) else str(error)
            lines.append(f"  - {step}: {message}")
        return "\n".join(lines)
