"""Error handling decorators for CLI commands."""

import logging
import sys
import traceback
from collections.abc import Callable
from functools import wraps
from typing import Any

import typer

from usbvolumes.core.errors import ConfigError, EnumerationError, UsbVolumesError
from usbvolumes.core.structlog_logger import get_struct_logger


__all__ = ["handle_errors", "print_stack_trace_if_verbose"]

logger = get_struct_logger(__name__)


def handle_errors(func: Callable[..., Any]) -> Callable[..., Any]:
    """Decorator to handle common exceptions in CLI commands.

    Known errors are logged and turned into exit status 1.
    """

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except ConfigError as e:
            logger.error("configuration_error", error=str(e))
            print_stack_trace_if_verbose()
            raise typer.Exit(1) from e
        except EnumerationError as e:
            logger.error(
                "enumeration_error",
                source=e.source,
                operation=e.operation,
                error=str(e),
            )
            print_stack_trace_if_verbose()
            raise typer.Exit(1) from e
        except UsbVolumesError as e:
            logger.error("usbvolumes_error", error=str(e))
            print_stack_trace_if_verbose()
            raise typer.Exit(1) from e
        except Exception as e:
            exc_info = logging.getLogger().isEnabledFor(logging.DEBUG)
            logger.error("unexpected_error", error=str(e), exc_info=exc_info)
            print_stack_trace_if_verbose()
            raise typer.Exit(1) from e

    return wrapper


def print_stack_trace_if_verbose() -> None:
    """Print stack trace if the configured log level is DEBUG."""
    if logging.getLogger().isEnabledFor(logging.DEBUG):
        print("\nStack trace:", file=sys.stderr)
        traceback.print_exc(file=sys.stderr)
