#!/usr/bin/env python3
"""
decorators.py
--------------------
Shared decorators for store operations.

Stack them on manager methods, error handling outermost:

    @handle_db_errors
    @log_database_operation("create_tag")
    def create(self, metadata): ...

log_database_operation times the call and logs start, completion or
failure through the manager's logger. validate_metadata rejects
metadata dicts missing required fields before the body runs.
handle_db_errors translates SQLAlchemy failures into the logbook's typed
exceptions, naming the failed step after the operation
("Failed to create tag: ...").
"""
from functools import wraps
from typing import Callable, List
from datetime import datetime

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from scobro.core.exceptions import ReferentialError, StoreError
from scobro.core.logging_manager import safe_logger
from scobro.core.validators import DataValidator


def _describe(operation_name: str) -> str:
    return operation_name.replace("_", " ")


def _is_foreign_key_violation(error: IntegrityError) -> bool:
    return "foreign key" in str(error.orig if error.orig else error).lower()


def log_database_operation(operation_name: str):
    """
    Decorator to log store operations with timing and context.

    Args:
        operation_name: Name of the operation being logged

    Returns:
        Decorator function
    """

    def decorator(function: Callable) -> Callable:
        @wraps(function)
        def wrapper(self, *args, **kwargs):
            logger = safe_logger(getattr(self, "logger", None))
            start_time = datetime.now()
            operation_id = f"{operation_name}_{start_time.strftime('%Y%m%d_%H%M%S_%f')}"

            logger.log_debug(
                f"Starting {operation_name}",
                {
                    "operation_id": operation_id,
                    "args_count": len(args),
                    "kwargs_keys": list(kwargs.keys()),
                },
            )

            try:
                result = function(self, *args, **kwargs)
            except Exception as e:
                logger.log_error(
                    e,
                    {
                        "operation": operation_name,
                        "operation_id": operation_id,
                        "duration_seconds": (datetime.now() - start_time).total_seconds(),
                    },
                )
                raise

            logger.log_operation(
                f"{operation_name}_completed",
                {
                    "operation_id": operation_id,
                    "duration_seconds": (datetime.now() - start_time).total_seconds(),
                    "success": True,
                },
            )
            return result

        wrapper.operation_name = operation_name  # type: ignore[attr-defined]
        return wrapper

    return decorator


def validate_metadata(required_fields: List[str]):
    """
    Decorator to validate metadata dictionaries before processing.

    The metadata dict is the `metadata` keyword, or else the last
    positional argument.

    Args:
        required_fields: List of required field names

    Returns:
        Decorator function
    """

    def decorator(function: Callable) -> Callable:
        @wraps(function)
        def wrapper(self, *args, **kwargs):
            if "metadata" in kwargs:
                metadata = kwargs["metadata"]
            else:
                metadata = args[-1] if args else {}

            DataValidator.validate_required_fields(metadata, required_fields)

            return function(self, *args, **kwargs)

        return wrapper

    return decorator


def handle_db_errors(function: Callable) -> Callable:
    """
    Decorator to translate SQLAlchemy errors into logbook exceptions.

    - IntegrityError on a foreign key -> ReferentialError
    - any other IntegrityError / SQLAlchemyError -> StoreError
    - everything else (typed domain errors included) propagates unchanged

    Args:
        function: Function to wrap (optionally already wrapped by
            log_database_operation, whose name is used for the message)

    Returns:
        Wrapped function with error handling
    """
    step = _describe(getattr(function, "operation_name", function.__name__))

    @wraps(function)
    def wrapper(*args, **kwargs):
        try:
            return function(*args, **kwargs)
        except IntegrityError as e:
            if _is_foreign_key_violation(e):
                raise ReferentialError(
                    f"Failed to {step}: referenced row does not exist ({e.orig})"
                ) from e
            raise StoreError(f"Failed to {step}: data integrity violation ({e.orig})") from e
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to {step}: {e}") from e

    return wrapper
