"""Pydantic models for the apis object handed to the declaration generator."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator, model_validator

from apidecl.errors import MalformedApiError


class ParamSpec(BaseModel):
    """Requiredness descriptor for a single request parameter."""

    required: bool = Field(default=False, description="Whether the parameter must be passed.")

    @model_validator(mode="before")
    @classmethod
    def _read_required(cls, data: Any) -> dict[str, bool]:
        # Accepts both spellings, from a mapping or from attributes.
        if data is None:
            raise ValueError("parameter descriptor must not be null")
        if isinstance(data, Mapping):
            flags = (data.get("required"), data.get("isRequired"))
        else:
            flags = (getattr(data, "required", None), getattr(data, "isRequired", None))
        return {"required": any(bool(flag) for flag in flags)}


Params = Union[list[str], dict[str, ParamSpec]]


class FunctionSpec(BaseModel):
    """A single request function. Only ``params`` matters to the generator."""

    model_config = ConfigDict(extra="allow", from_attributes=True)

    params: Params = Field(
        default_factory=list,
        description="Parameter names (all optional) or a name -> ParamSpec mapping.",
    )

    @model_validator(mode="before")
    @classmethod
    def _read_request_function(cls, data: Any) -> Any:
        # Request functions carry key/mock/params as function attributes.
        if isinstance(data, (Mapping, BaseModel)) or not (callable(data) or hasattr(data, "params")):
            return data
        fields = {"params": getattr(data, "params", None)}
        for name in ("key", "mock"):
            if hasattr(data, name):
                fields[name] = getattr(data, name)
        return fields

    @field_validator("params", mode="before")
    @classmethod
    def _absent_params(cls, value: Any) -> Any:
        return [] if value is None else value


ApiGroup = dict[str, FunctionSpec]
ApiMap = dict[str, ApiGroup]

_API_MAP_ADAPTER: TypeAdapter[ApiMap] = TypeAdapter(ApiMap)


def parse_api_map(apis: Any) -> ApiMap:
    """Validate a runtime apis object into an :data:`ApiMap`.

    Groups and functions keep the iteration order of the input mappings.

    Raises:
        MalformedApiError: If any level does not match the expected shape.
    """
    try:
        return _API_MAP_ADAPTER.validate_python(apis, from_attributes=True)
    except ValidationError as e:
        raise MalformedApiError(f"Malformed apis object:\n{e}") from e


_PARAMS_ADAPTER: TypeAdapter[Params] = TypeAdapter(Params)


def parse_params(params: Any) -> Params:
    """Validate one function's ``params`` value; ``None`` means no params."""
    if params is None:
        return []
    try:
        return _PARAMS_ADAPTER.validate_python(params, from_attributes=True)
    except ValidationError as e:
        raise MalformedApiError(f"Malformed params:\n{e}") from e
