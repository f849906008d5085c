"""Shared descriptor fixtures for generator tests."""

from __future__ import annotations

import pytest
from google.protobuf import descriptor_pb2


def make_route_guide_file(package: str = "routeguide") -> descriptor_pb2.FileDescriptorProto:
    """The classic route_guide.proto, one method per streaming shape."""
    prefix = f".{package}" if package else ""
    file_proto = descriptor_pb2.FileDescriptorProto(
        name="routeguide/route_guide.proto" if package else "route_guide.proto",
        package=package,
        syntax="proto3",
    )
    for name in ("Point", "Rectangle", "Feature", "RouteNote", "RouteSummary"):
        file_proto.message_type.add(name=name)

    service = file_proto.service.add(name="RouteGuide")
    service.method.add(
        name="GetFeature",
        input_type=f"{prefix}.Point",
        output_type=f"{prefix}.Feature",
    )
    service.method.add(
        name="ListFeatures",
        input_type=f"{prefix}.Rectangle",
        output_type=f"{prefix}.Feature",
        server_streaming=True,
    )
    service.method.add(
        name="RecordRoute",
        input_type=f"{prefix}.Point",
        output_type=f"{prefix}.RouteSummary",
        client_streaming=True,
    )
    service.method.add(
        name="RouteChat",
        input_type=f"{prefix}.RouteNote",
        output_type=f"{prefix}.RouteNote",
        client_streaming=True,
        server_streaming=True,
    )
    return file_proto


@pytest.fixture
def route_guide_file() -> descriptor_pb2.FileDescriptorProto:
    return make_route_guide_file()
