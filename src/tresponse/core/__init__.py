"""tresponse core - response state, its policies and the ambient stack."""

from .coercion import CoercionMode, coerce
from .config import CoreSettings, clear_config_cache, get_config, is_local_env
from .context import get_response, peek_response, response_context
from .exceptions import (
    DuplicationError,
    InvalidStatusCodeError,
    TResponseException,
)
from .logging import configure_logging, correlation_context
from .response import (
    DEFAULT_ERROR_MESSAGE,
    DEFAULT_EXCEPTION_MESSAGE,
    DEFAULT_SUCCESS_MESSAGE,
    RESERVED_ATTRIBUTES,
    ResponseState,
    merge_extras,
)
from .status import VALID_HTTP_STATUS_CODES, validate_status

__all__ = [
    # Response state
    "ResponseState",
    "merge_extras",
    "DEFAULT_SUCCESS_MESSAGE",
    "DEFAULT_ERROR_MESSAGE",
    "DEFAULT_EXCEPTION_MESSAGE",
    "RESERVED_ATTRIBUTES",
    # Scoping
    "get_response",
    "peek_response",
    "response_context",
    # Policies
    "CoercionMode",
    "coerce",
    "VALID_HTTP_STATUS_CODES",
    "validate_status",
    # Exceptions
    "TResponseException",
    "DuplicationError",
    "InvalidStatusCodeError",
    # Config
    "CoreSettings",
    "get_config",
    "clear_config_cache",
    "is_local_env",
    # Logging
    "configure_logging",
    "correlation_context",
]
