"""Starlette integration for tresponse."""

from .middleware import ResponseStateMiddleware, json_response

__all__ = ["ResponseStateMiddleware", "json_response"]
