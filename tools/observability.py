"""Observability helpers for instrumenting catalog operations."""

from __future__ import annotations

import inspect
import logging
import time
from functools import wraps
from typing import Any, Callable, Dict, TypeVar

from pydantic import BaseModel, ValidationError

from wardrobe_app.logging_config import (
    ensure_correlation_id,
    get_logger,
    log_event,
    redact_for_log,
)

LOGGER = get_logger(__name__)
F = TypeVar("F", bound=Callable[..., Any])


def _preview_kwargs(kwargs: dict, max_keys: int = 6) -> dict:
    preview: dict = {}
    for idx, (key, value) in enumerate(kwargs.items()):
        if idx >= max_keys:
            preview["truncated"] = True
            break
        preview[key] = value
    return redact_for_log(preview)


def _bind_arguments(signature: inspect.Signature, args: tuple, kwargs: dict) -> Dict[str, Any]:
    """Map positional and keyword arguments onto parameter names, minus ``self``."""

    bound = signature.bind(*args, **kwargs)
    bound.apply_defaults()
    arguments = dict(bound.arguments)
    arguments.pop("self", None)
    return arguments


def instrument_operation(
    operation_name: str,
    input_model: type[BaseModel] | None = None,
    on_validation_error: Callable[[ValidationError], Any] | None = None,
) -> Callable[[F], F]:
    """Wrap a sync or async callable with structured logs and input validation.

    When ``input_model`` is given, the call's named arguments are validated
    and the normalised values are passed on. A validation failure is logged
    and either handed to ``on_validation_error`` or re-raised.
    """

    def decorator(func: F) -> F:
        signature = inspect.signature(func)
        is_method = "self" in signature.parameters

        def _prepare(args: tuple, kwargs: dict) -> tuple[tuple, dict, str]:
            correlation_id = ensure_correlation_id()
            if not input_model:
                return args, kwargs, correlation_id
            arguments = _bind_arguments(signature, args, kwargs)
            validated = input_model.model_validate(arguments)
            call_args = (args[0],) if is_method else ()
            return call_args, validated.model_dump(), correlation_id

        def _log_validation_failure(exc: ValidationError, correlation_id: str) -> None:
            log_event(
                LOGGER,
                logging.INFO,
                "operation_validation_failed",
                operation=operation_name,
                correlation_id=correlation_id,
                errors=[
                    {"loc": list(error.get("loc", ())), "type": error.get("type"), "msg": error.get("msg")}
                    for error in exc.errors()
                ],
            )

        def _log_started(kwargs: dict, correlation_id: str) -> None:
            log_event(
                LOGGER,
                logging.DEBUG,
                "operation_started",
                operation=operation_name,
                correlation_id=correlation_id,
                kwargs=_preview_kwargs(kwargs),
            )

        def _log_finished(event: str, start: float, correlation_id: str, level: int, **extra: Any) -> None:
            duration_ms = round((time.perf_counter() - start) * 1000, 2)
            log_event(
                LOGGER,
                level,
                event,
                operation=operation_name,
                correlation_id=correlation_id,
                duration_ms=duration_ms,
                **extra,
            )

        if inspect.iscoroutinefunction(func):

            @wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                start = time.perf_counter()
                correlation_id = ensure_correlation_id()
                try:
                    call_args, call_kwargs, correlation_id = _prepare(args, kwargs)
                except ValidationError as exc:
                    _log_validation_failure(exc, correlation_id)
                    if on_validation_error:
                        return on_validation_error(exc)
                    raise
                _log_started(call_kwargs, correlation_id)
                try:
                    result = await func(*call_args, **call_kwargs)
                except Exception:
                    _log_finished("operation_failed", start, correlation_id, logging.ERROR, exc_info=True)
                    raise
                _log_finished("operation_completed", start, correlation_id, logging.INFO)
                return result

            return async_wrapper  # type: ignore[return-value]

        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            start = time.perf_counter()
            correlation_id = ensure_correlation_id()
            try:
                call_args, call_kwargs, correlation_id = _prepare(args, kwargs)
            except ValidationError as exc:
                _log_validation_failure(exc, correlation_id)
                if on_validation_error:
                    return on_validation_error(exc)
                raise
            _log_started(call_kwargs, correlation_id)
            try:
                result = func(*call_args, **call_kwargs)
            except Exception:
                _log_finished("operation_failed", start, correlation_id, logging.ERROR, exc_info=True)
                raise
            _log_finished("operation_completed", start, correlation_id, logging.INFO)
            return result

        return wrapper  # type: ignore[return-value]

    return decorator


def reject_silently(_: ValidationError) -> None:
    """Validation handler for user actions that are no-ops when invalid."""

    return None


__all__ = ["instrument_operation", "reject_silently"]
