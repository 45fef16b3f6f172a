"""Turn declarative tool parameters into pydantic argument models.

Each ``ToolDefinition`` gets one generated model. Validating a call means
instantiating that model: unknown fields, wrong types, enum violations and
out-of-range values are rejected, and omitted optional arguments receive
their declared defaults.
"""

from __future__ import annotations

import copy
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictFloat,
    StrictInt,
    StrictStr,
    ValidationError,
    create_model,
)

from modules.netcores.errors import InvalidArgumentsError
from shared.schemas.tools import ToolDefinition, ToolParameter

_SCALARS: dict[str, Any] = {
    "integer": StrictInt,
    "string": StrictStr,
    "boolean": StrictBool,
    "number": Union[StrictInt, StrictFloat],
}


def _scalar(type_name: str, enum: tuple[str, ...] | None) -> Any:
    if enum:
        return Literal[enum]
    try:
        return _SCALARS[type_name]
    except KeyError:
        raise ValueError(f"Unsupported parameter type: {type_name}") from None


def _annotation(param: ToolParameter) -> Any:
    """Annotation for one parameter, with its constraints attached."""
    if param.type == "array":
        if param.items is None:
            raise ValueError(f"Array parameter '{param.name}' needs an item type")
        base: Any = list[_scalar(param.items.type, param.items.enum)]
        constraints = {"min_length": param.min_items, "max_length": param.max_items}
    else:
        base = _scalar(param.type, param.enum)
        constraints = {"ge": param.minimum, "le": param.maximum, "pattern": param.pattern}

    constraints = {k: v for k, v in constraints.items() if v is not None}
    if constraints:
        base = Annotated[base, Field(**constraints)]

    if param.required or param.default is not None:
        return base
    return Optional[base]


def build_argument_model(definition: ToolDefinition) -> type[BaseModel]:
    """Generate the argument model for a tool definition."""
    fields: dict[str, Any] = {}
    for param in definition.parameters:
        if param.required:
            default = Field(..., description=param.description)
        else:
            default = Field(
                default=copy.deepcopy(param.default),
                description=param.description,
            )
        fields[param.name] = (_annotation(param), default)

    model_name = "".join(part.title() for part in definition.name.split("_")) + "Arguments"
    return create_model(
        model_name,
        __config__=ConfigDict(extra="forbid", frozen=True),
        **fields,
    )


def _describe(exc: ValidationError) -> str:
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]) or "arguments"
        problems.append(f"{location}: {error['msg']}")
    return "; ".join(problems)


def validate_arguments(model: type[BaseModel], arguments: Any) -> dict[str, Any]:
    """Validate raw arguments and return them with defaults applied.

    Raises:
        InvalidArgumentsError: The arguments do not satisfy the model.
    """
    if arguments is None:
        arguments = {}
    if not isinstance(arguments, dict):
        raise InvalidArgumentsError(
            f"arguments must be an object, got {type(arguments).__name__}"
        )

    try:
        validated = model.model_validate(arguments)
    except ValidationError as e:
        raise InvalidArgumentsError(_describe(e)) from e

    return validated.model_dump()
