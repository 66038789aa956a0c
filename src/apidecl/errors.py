"""Exceptions raised while loading API maps and generating declarations."""

from __future__ import annotations


class ApiDeclError(ValueError):
    """Base class for all apidecl errors."""


class MalformedApiError(ApiDeclError):
    """The apis object does not have the ApiMap -> ApiGroup -> FunctionSpec shape."""


class ApiLoadError(ApiDeclError):
    """The apis source could not be located or loaded."""
