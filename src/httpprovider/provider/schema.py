"""Attribute schema shared by the http data source and resource."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from ..models.diagnostics import Diagnostics
from ..models.request import ALLOWED_METHODS


class AttributeType(str, Enum):
    """Attribute value types understood by the host."""

    STRING = "string"
    NUMBER = "number"
    MAP_STRING = "map(string)"


class AttributeMode(str, Enum):
    """Who sets an attribute: the user, optionally the user, or the provider."""

    REQUIRED = "required"
    OPTIONAL = "optional"
    COMPUTED = "computed"


@dataclass(frozen=True)
class Attribute:
    """
    One attribute of a schema.

    Attributes:
        name: Attribute name as seen by the host
        type: Value type
        mode: Required, optional or computed
        description: Human-readable description
        deprecation_message: Set when the attribute is deprecated
        one_of: Allowed values (case-sensitive), if restricted
    """

    name: str
    type: AttributeType
    mode: AttributeMode
    description: str
    deprecation_message: Optional[str] = None
    one_of: Optional[tuple[str, ...]] = None

    @property
    def is_input(self) -> bool:
        return self.mode != AttributeMode.COMPUTED

    def check_type(self, value: Any) -> bool:
        """Check if a value has this attribute's type."""
        if self.type == AttributeType.STRING:
            return isinstance(value, str)
        if self.type == AttributeType.NUMBER:
            return isinstance(value, int) and not isinstance(value, bool)
        if self.type == AttributeType.MAP_STRING:
            return isinstance(value, Mapping) and all(
                isinstance(k, str) and isinstance(v, str) for k, v in value.items()
            )
        return False

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "type": self.type.value,
            self.mode.value: True,
            "description": self.description,
        }
        if self.deprecation_message:
            data["deprecation_message"] = self.deprecation_message
        if self.one_of:
            data["one_of"] = list(self.one_of)
        return data


class Schema:
    """
    Ordered set of attributes with config validation.

    Example:
        diags = HTTP_SCHEMA.validate_config({"url": "https://example.com"})
        assert not diags.has_error()
    """

    def __init__(self, attributes: list[Attribute], description: str = "") -> None:
        self.description = description
        self._attributes = {attr.name: attr for attr in attributes}

    @property
    def attributes(self) -> list[Attribute]:
        return list(self._attributes.values())

    @property
    def input_names(self) -> list[str]:
        return [attr.name for attr in self._attributes.values() if attr.is_input]

    @property
    def computed_names(self) -> list[str]:
        return [attr.name for attr in self._attributes.values() if not attr.is_input]

    def __getitem__(self, name: str) -> Attribute:
        return self._attributes[name]

    def __contains__(self, name: object) -> bool:
        return name in self._attributes

    def validate_config(self, config: Any) -> Diagnostics:
        """
        Validate user configuration against this schema.

        Null values count as unset.

        Args:
            config: Mapping of attribute name to value

        Returns:
            Diagnostics with one error per problem found
        """
        diags = Diagnostics()

        if not isinstance(config, Mapping):
            diags.add_error("Invalid configuration", f"Expected an object, got {type(config).__name__}")
            return diags

        for name in config:
            if name not in self._attributes:
                diags.add_error(
                    "Unsupported argument",
                    f'An argument named "{name}" is not expected here.',
                    attribute=str(name),
                )

        for attr in self._attributes.values():
            value = config.get(attr.name)

            if value is None:
                if attr.mode == AttributeMode.REQUIRED:
                    diags.add_error(
                        "Missing required argument",
                        f'The argument "{attr.name}" is required, but no definition was found.',
                        attribute=attr.name,
                    )
                continue

            if attr.mode == AttributeMode.COMPUTED:
                diags.add_error(
                    "Invalid configuration",
                    f'The attribute "{attr.name}" is computed and cannot be set.',
                    attribute=attr.name,
                )
                continue

            if not attr.check_type(value):
                diags.add_error(
                    "Incorrect attribute value type",
                    f'The attribute "{attr.name}" must be of type {attr.type.value}.',
                    attribute=attr.name,
                )
                continue

            if attr.one_of is not None and value not in attr.one_of:
                diags.add_error(
                    "Invalid attribute value",
                    f'The attribute "{attr.name}" must be one of {", ".join(attr.one_of)}, got "{value}".',
                    attribute=attr.name,
                )

        return diags

    def to_dict(self) -> dict[str, Any]:
        """Convert schema to a dictionary for schema negotiation."""
        return {
            "description": self.description,
            "attributes": {name: attr.to_dict() for name, attr in self._attributes.items()},
        }


HTTP_SCHEMA = Schema(
    description="Performs one HTTP request and exposes the response as read-only state.",
    attributes=[
        Attribute(
            "id",
            AttributeType.STRING,
            AttributeMode.COMPUTED,
            "The URL used for the request.",
        ),
        Attribute(
            "url",
            AttributeType.STRING,
            AttributeMode.REQUIRED,
            "The URL for the request. Supported schemes are `http` and `https`.",
        ),
        Attribute(
            "method",
            AttributeType.STRING,
            AttributeMode.OPTIONAL,
            "The HTTP Method for the request. Allowed methods are a subset of methods defined in "
            "RFC 7231 section 4.3, namely `GET`, `HEAD`, and `POST`. `POST` support is only "
            "intended for read-only URLs, such as submitting a search.",
            one_of=ALLOWED_METHODS,
        ),
        Attribute(
            "request_headers",
            AttributeType.MAP_STRING,
            AttributeMode.OPTIONAL,
            "A map of request header field names and values.",
        ),
        Attribute(
            "request_body",
            AttributeType.STRING,
            AttributeMode.OPTIONAL,
            "The request body as a string.",
        ),
        Attribute(
            "response_body",
            AttributeType.STRING,
            AttributeMode.COMPUTED,
            "The response body returned as a string.",
        ),
        Attribute(
            "body",
            AttributeType.STRING,
            AttributeMode.COMPUTED,
            "The response body returned as a string. "
            "**NOTE**: This is deprecated, use `response_body` instead.",
            deprecation_message="Use response_body instead",
        ),
        Attribute(
            "response_headers",
            AttributeType.MAP_STRING,
            AttributeMode.COMPUTED,
            "A map of response header field names and values. Duplicate headers are "
            "concatenated according to RFC 2616 section 4.2.",
        ),
        Attribute(
            "status_code",
            AttributeType.NUMBER,
            AttributeMode.COMPUTED,
            "The HTTP response status code.",
        ),
    ],
)
