# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Response state for a single request.

A ``ResponseState`` accumulates the outcome of whatever the request did
(success or error, status code, message, extra fields) and serializes it
into a consistent ``{error, status, message, ...}`` payload. Booleans,
messages and raised exceptions all go through the same policy, so callers
never build ad-hoc dicts.

Usage::

    from tresponse.core import response

    try:
        saved = repo.save(item)
        response.handle(saved, "Item saved", "Item could not be saved", 409)
        response.info({"id": item.id})
    except Exception as e:
        response.exception(e)

    return response.serialize()

The module-level helpers act on the state bound to the current context
(see ``tresponse.core.context``).
"""

from __future__ import annotations

import json
import logging
import traceback
from collections.abc import Mapping
from typing import Any

from .coercion import CoercionMode, coerce
from .config import get_config
from .context import get_response
from .exceptions import DuplicationError
from .status import FALLBACK_STATUS, is_valid_status, validate_status

logger = logging.getLogger(__name__)

DEFAULT_SUCCESS_MESSAGE = "Action completed successfully!"
DEFAULT_ERROR_MESSAGE = "Unable to complete this action."
DEFAULT_EXCEPTION_MESSAGE = (
    "An unexpected error occurred while performing this action, please try again later."
)
PLACEHOLDER_MESSAGE = "_"

RESERVED_ATTRIBUTES = frozenset({"error", "message", "status", "file", "line", "trace", "type"})
EXCEPTION_ATTRIBUTES = ("type", "file", "line", "trace")
INFO_SUFFIX = "_info"

# Mirrors the loose-coercion falsy strings
_EMPTY_MESSAGES = frozenset({"", "0"})

_ELIDED_SUCCESS_MESSAGES = frozenset(
    {
        "",
        PLACEHOLDER_MESSAGE,
        DEFAULT_SUCCESS_MESSAGE,
        DEFAULT_ERROR_MESSAGE,
        DEFAULT_EXCEPTION_MESSAGE,
    }
)


def merge_extras(extra: dict[str, Any], fields: Mapping[str, Any]) -> dict[str, Any]:
    """Merge ``fields`` into ``extra`` in place without overwriting.

    A key that is reserved or already present is stored as ``<key>_info``.
    The suffix is applied once; a later collision on the same key replaces
    the earlier ``_info`` value.

    Returns:
        The same ``extra`` dict.
    """
    for key, value in fields.items():
        key = str(key)
        if key in RESERVED_ATTRIBUTES or key in extra:
            suffixed = f"{key}{INFO_SUFFIX}"
            logger.debug("Extra field %r collides, stored as %r", key, suffixed)
            extra[suffixed] = value
        else:
            extra[key] = value
    return extra


def _structural_copy(value: Any) -> Any:
    """Copy containers recursively; any other value is shared as-is."""
    if isinstance(value, dict):
        return {key: _structural_copy(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_structural_copy(item) for item in value]
    if isinstance(value, tuple):
        return tuple(_structural_copy(item) for item in value)
    if isinstance(value, (set, frozenset)):
        return type(value)(value)
    return value


def _is_own_frame(frame: traceback.FrameSummary) -> bool:
    return frame.filename == __file__


def _exception_frames(exc: BaseException) -> list[traceback.FrameSummary]:
    if exc.__traceback__ is not None:
        return list(traceback.extract_tb(exc.__traceback__))
    # Never raised: fall back to where it was handed to us
    frames = traceback.extract_stack()
    while frames and _is_own_frame(frames[-1]):
        frames.pop()
    return list(frames)


def _exception_message(exc: BaseException) -> str:
    message = getattr(exc, "message", None)
    if isinstance(message, str):
        return message
    return str(exc)


class ResponseState:
    """Mutable outcome of the current request.

    Attributes:
        error:   True when the outcome is a failure.
        status:  HTTP status code, always from the allow-list or 500.
        message: Human-readable description, never empty after a setter.
        extra:   Auxiliary fields; reserved names are suffixed with ``_info``.

    Instances cannot be copied or pickled; use
    ``tresponse.core.context.get_response()`` to reach the one bound to the
    current request.
    """

    def __init__(
        self,
        *,
        redact_exceptions: bool | None = None,
        strict_status: bool | None = None,
    ) -> None:
        if redact_exceptions is None or strict_status is None:
            config = get_config()
            if redact_exceptions is None:
                redact_exceptions = config.redact_exceptions
            if strict_status is None:
                strict_status = config.strict_status

        self.redact_exceptions = redact_exceptions
        self.strict_status = strict_status

        self.error: bool = False
        self.status: int = 200
        self.message: str = PLACEHOLDER_MESSAGE
        self.extra: dict[str, Any] = {}

    @classmethod
    def instance(cls) -> ResponseState:
        """Return the state bound to the current context."""
        return get_response()

    def __copy__(self):
        raise DuplicationError()

    def __deepcopy__(self, memo):
        raise DuplicationError()

    def __reduce_ex__(self, protocol):
        raise DuplicationError()

    def __repr__(self) -> str:
        return (
            f"ResponseState(error={self.error!r}, status={self.status!r}, "
            f"message={self.message!r}, extra={sorted(self.extra)!r})"
        )

    def __str__(self) -> str:
        # Success always renders the default text, whatever the message says
        if self.error:
            return self.message or DEFAULT_ERROR_MESSAGE
        return DEFAULT_SUCCESS_MESSAGE

    # ------------------------------------------------------------------
    # Setters
    # ------------------------------------------------------------------

    def _default_message(self) -> str:
        return DEFAULT_ERROR_MESSAGE if self.error else DEFAULT_SUCCESS_MESSAGE

    def _checked_status(self, code: Any) -> int:
        return validate_status(code, strict=self.strict_status)

    def set_message(self, text: Any = "") -> None:
        """Set the message, substituting the default for empty input.

        ``None``, ``""`` and ``"0"`` count as empty. Anything else is stored
        as its ``str()``.
        """
        text = "" if text is None else str(text)
        self.message = self._default_message() if text in _EMPTY_MESSAGES else text

    def info(self, fields: Mapping[str, Any]) -> ResponseState:
        """Attach extra fields, suffixing colliding keys with ``_info``."""
        merge_extras(self.extra, fields)
        return self

    set_data = info

    # ------------------------------------------------------------------
    # Outcomes
    # ------------------------------------------------------------------

    def succeed(self, message: str = "") -> ResponseState:
        """Mark the response successful with status 200."""
        self.error = False
        self.status = 200
        self.set_message(message)
        return self

    def fail(self, message: str | BaseException = "", status: int = 500) -> ResponseState:
        """Mark the response failed.

        An exception passed as ``message`` is captured with ``exception()``.
        Otherwise every extra field is cleared, including the exception
        fields left by an earlier capture.
        """
        if isinstance(message, BaseException):
            return self.exception(message)

        checked = self._checked_status(status)

        self.error = True
        self.status = checked
        self.extra.clear()
        self.set_message(message)
        return self

    def handle(
        self,
        outcome: Any,
        success_message: str = "",
        error_message: str = "",
        error_code: int = 500,
        strict: bool = False,
    ) -> ResponseState:
        """Translate an arbitrary outcome into response state.

        Args:
            outcome: Value to evaluate, or an exception to capture.
            success_message: Message used when the outcome is a success.
            error_message: Message used when the outcome is a failure.
            error_code: Status used when the outcome is a failure.
            strict: Only the literal ``True`` counts as success.
        """
        if isinstance(outcome, BaseException):
            return self.exception(outcome)

        mode = CoercionMode.STRICT if strict else CoercionMode.LOOSE
        succeeded = coerce(outcome, mode)

        checked = self._checked_status(200 if succeeded else error_code)

        self.error = not succeeded
        self.status = checked
        self.set_message(error_message if self.error else success_message)
        return self

    def exception(self, exc: BaseException) -> ResponseState:
        """Absorb an exception into the response. Never re-raises.

        The status comes from an integer ``exc.code`` when it is allowed,
        500 otherwise. Extra fields are replaced by the exception's ``type``,
        ``file``, ``line`` and ``trace`` unless redaction is enabled.
        """
        self.error = True

        code = getattr(exc, "code", None)
        self.status = code if is_valid_status(code) else FALLBACK_STATUS

        self.extra.clear()
        if self.redact_exceptions:
            self.set_message(DEFAULT_EXCEPTION_MESSAGE)
        else:
            self.set_message(_exception_message(exc))
            frames = _exception_frames(exc)
            origin = frames[-1] if frames else None
            self.extra.update(
                {
                    "type": type(exc).__name__,
                    "file": origin.filename if origin else None,
                    "line": origin.lineno if origin else None,
                    "trace": [
                        {"file": f.filename, "line": f.lineno, "function": f.name} for f in frames
                    ],
                }
            )

        logger.debug("Captured %s as response status %d", type(exc).__name__, self.status)
        return self

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    def has_error(self) -> bool:
        return self.error

    def get_status(self) -> int:
        return self.status

    def get_message(self) -> str:
        return self.message

    @staticmethod
    def detect_error(candidate: Any) -> bool:
        """Return ``candidate.error`` for a ResponseState, False for anything else."""
        if isinstance(candidate, ResponseState):
            return candidate.error
        return False

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def serialize(self) -> dict[str, Any]:
        """Build the transport payload.

        ``error`` and ``status`` are always present. On success the message
        is left out when it is empty or one of the canned defaults. Extra
        fields follow under their stored keys. The state is not modified.
        """
        payload: dict[str, Any] = {"error": self.error, "status": self.status}
        if self.error or self.message not in _ELIDED_SUCCESS_MESSAGES:
            payload["message"] = self.message
        payload.update(_structural_copy(self.extra))
        return payload

    def to_json(self) -> str:
        return json.dumps(self.serialize(), default=str)


# ======================================================================
# Helpers acting on the state bound to the current context
# ======================================================================


def _current() -> ResponseState:
    return get_response()


def success(message: str = "") -> ResponseState:
    return _current().succeed(message)


def error(message: str | BaseException = "", status: int = 500) -> ResponseState:
    return _current().fail(message, status)


def handle(
    outcome: Any,
    success_message: str = "",
    error_message: str = "",
    error_code: int = 500,
    strict: bool = False,
) -> ResponseState:
    return _current().handle(outcome, success_message, error_message, error_code, strict)


def exception(exc: BaseException) -> ResponseState:
    return _current().exception(exc)


def info(fields: Mapping[str, Any]) -> ResponseState:
    return _current().info(fields)


set_data = info


def message(text: str = "") -> None:
    _current().set_message(text)


def detect_error(candidate: Any) -> bool:
    return ResponseState.detect_error(candidate)


def has_error() -> bool:
    return _current().has_error()


def status() -> int:
    return _current().get_status()


def serialize() -> dict[str, Any]:
    return _current().serialize()


def api() -> str:
    """Serialized payload of the current state as a JSON string."""
    return _current().to_json()
