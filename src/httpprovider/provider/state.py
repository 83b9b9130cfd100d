"""Conversion between host state/config objects and fetch models."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Optional

import pydantic

from ..errors import ValidationError
from ..models.diagnostics import Diagnostics
from ..models.request import RequestSpec
from ..models.result import FetchResult
from .schema import HTTP_SCHEMA

State = dict[str, Any]


@dataclass
class OperationResponse:
    """
    Outcome of one data source or resource call.

    ``state`` is None whenever ``diagnostics`` holds an error, so a
    failed call never persists partial state.
    """

    state: Optional[State] = None
    diagnostics: Diagnostics = field(default_factory=Diagnostics)

    def to_dict(self) -> dict[str, Any]:
        return {"state": self.state, "diagnostics": self.diagnostics.to_list()}


def spec_from_config(config: Mapping[str, Any]) -> RequestSpec:
    """
    Build a RequestSpec from the input attributes of a config or state.

    Raises:
        ValidationError: If the inputs do not form a valid request
    """
    inputs = {name: config.get(name) for name in HTTP_SCHEMA.input_names}
    try:
        return RequestSpec.model_validate(inputs)
    except pydantic.ValidationError as e:
        first = e.errors()[0]
        attribute = ".".join(str(part) for part in first["loc"]) or None
        raise ValidationError("Invalid attribute value", first["msg"], attribute=attribute) from e


def build_state(config: Mapping[str, Any], result: FetchResult) -> State:
    """
    Assemble the full state object for a fetch.

    Input attributes are echoed back as configured; computed attributes
    come from the result. ``body`` mirrors ``response_body``.
    """
    state: State = {name: None for name in (attr.name for attr in HTTP_SCHEMA.attributes)}
    for name in HTTP_SCHEMA.input_names:
        state[name] = config.get(name)

    state["id"] = result.identity
    state["response_body"] = result.response_body
    state["body"] = result.response_body
    state["response_headers"] = dict(result.response_headers)
    state["status_code"] = result.status_code
    return state
