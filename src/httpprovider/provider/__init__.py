"""Provider, data source and resource for the http object kind."""

from .datasource import HttpDataSource
from .provider import HttpProvider
from .resource import HttpResource
from .schema import HTTP_SCHEMA, Attribute, AttributeMode, AttributeType, Schema
from .state import OperationResponse, build_state, spec_from_config

__all__ = [
    "HTTP_SCHEMA",
    "Attribute",
    "AttributeMode",
    "AttributeType",
    "HttpDataSource",
    "HttpProvider",
    "HttpResource",
    "OperationResponse",
    "Schema",
    "build_state",
    "spec_from_config",
]
