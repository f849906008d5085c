"""Emit the Rust client source for one .proto file."""

from __future__ import annotations

import contextlib
import io
import logging
from collections.abc import Iterator
from typing import Protocol, TextIO

from google.protobuf import descriptor_pb2
from google.protobuf.compiler import plugin_pb2

from protoc_gen_rust_grpc.emitter.method_renderer import render_methods, render_template
from protoc_gen_rust_grpc.model.ir import ServiceModel
from protoc_gen_rust_grpc.parser.descriptor_adapter import adapt_file
from protoc_gen_rust_grpc.parser.doc_comment import to_doc_comment
from protoc_gen_rust_grpc.parser.name_transform import client_module_name, client_struct_name
from protoc_gen_rust_grpc.parser.type_path import TypePathResolver

logger = logging.getLogger(__name__)

_PROTO_SUFFIX = ".proto"
_OUTPUT_SUFFIX = "_grpc.pb.rs"

# Defaults documented on the generated configuration methods
_MAX_DECODING_DEFAULT = "4MB"
_MAX_ENCODING_DEFAULT = "usize::MAX"


class GeneratorContext(Protocol):
    """Hands out one writable sink per generated file."""

    def open(self, name: str) -> contextlib.AbstractContextManager[TextIO]: ...


class ResponseContext:
    """GeneratorContext that collects files into a CodeGeneratorResponse."""

    def __init__(self, response: plugin_pb2.CodeGeneratorResponse) -> None:
        self.response = response

    @contextlib.contextmanager
    def open(self, name: str) -> Iterator[TextIO]:
        buf = io.StringIO()
        yield buf
        self.response.file.add(name=name, content=buf.getvalue())
        logger.info("Wrote %s (%d bytes)", name, len(buf.getvalue()))


def output_file_name(proto_name: str) -> str:
    """routeguide/route_guide.proto -> routeguide/route_guide_grpc.pb.rs"""
    if proto_name.endswith(_PROTO_SUFFIX):
        proto_name = proto_name[: -len(_PROTO_SUFFIX)]
    return proto_name + _OUTPUT_SUFFIX


def render_service(service: ServiceModel) -> str:
    """Render the `pub mod <service>_client` block for one service."""
    return render_template(
        "client_service.rs.j2",
        client_mod=client_module_name(service.name),
        client_ident=client_struct_name(service.name),
        service_doc=to_doc_comment(service.comment, indent="    "),
        max_decoding_default=_MAX_DECODING_DEFAULT,
        max_encoding_default=_MAX_ENCODING_DEFAULT,
        methods=render_methods(service),
    )


def generate_file(
    file_proto: descriptor_pb2.FileDescriptorProto,
    resolver: TypePathResolver,
    context: GeneratorContext,
) -> bool:
    """Generate the client file for ``file_proto``.

    Returns False, without opening any output, when the file declares no
    services.
    """
    if not file_proto.service:
        logger.debug("Skipping %s: no services", file_proto.name)
        return False

    model = adapt_file(file_proto, resolver)
    with context.open(output_file_name(model.name)) as out:
        out.write(render_template("file_header.rs.j2", source=model.name))
        for service in model.services:
            logger.debug("Emitting client for %s", service.full_name)
            out.write("\n")
            out.write(render_service(service))
    return True
