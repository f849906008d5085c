"""Intermediate representation dataclasses for services in a .proto file."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Cardinality(Enum):
    """Which side(s) of an RPC send a stream of messages."""

    UNARY = "unary"
    SERVER_STREAMING = "server_streaming"
    CLIENT_STREAMING = "client_streaming"
    BIDI_STREAMING = "bidi_streaming"

    @classmethod
    def from_flags(cls, client_streaming: bool, server_streaming: bool) -> Cardinality:
        if client_streaming and server_streaming:
            return cls.BIDI_STREAMING
        if client_streaming:
            return cls.CLIENT_STREAMING
        if server_streaming:
            return cls.SERVER_STREAMING
        return cls.UNARY


@dataclass(frozen=True)
class MethodModel:
    name: str  # Rust method ident, e.g. "get_feature" or "r#type"
    proto_name: str  # as declared in the .proto file, used for the wire path
    full_name: str  # e.g. "routeguide.RouteGuide.GetFeature"
    cardinality: Cardinality
    request_type: str  # Rust type path, e.g. "crate::Point"
    response_type: str
    comment: str = ""
    is_deprecated: bool = False


@dataclass(frozen=True)
class ServiceModel:
    name: str  # Rust type ident, e.g. "RouteGuide"
    proto_name: str  # as declared, e.g. "RouteGuide"
    full_name: str  # package-qualified, e.g. "routeguide.RouteGuide"
    methods: tuple[MethodModel, ...] = field(default_factory=tuple)
    comment: str = ""


@dataclass(frozen=True)
class FileModel:
    name: str  # e.g. "routeguide/route_guide.proto"
    services: tuple[ServiceModel, ...] = field(default_factory=tuple)
