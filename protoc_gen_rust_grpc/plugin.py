"""protoc plugin entry point: CodeGeneratorRequest in, CodeGeneratorResponse out."""

from __future__ import annotations

import logging
import sys

from google.protobuf import descriptor_pb2
from google.protobuf.compiler import plugin_pb2

from protoc_gen_rust_grpc.emitter.rust_emitter import ResponseContext, generate_file
from protoc_gen_rust_grpc.errors import ConfigurationError
from protoc_gen_rust_grpc.parser.options import Options
from protoc_gen_rust_grpc.parser.type_path import TypePathResolver, load_crate_mapping

logger = logging.getLogger("protoc_gen_rust_grpc")

_SUPPORTED_FEATURES = (
    plugin_pb2.CodeGeneratorResponse.FEATURE_PROTO3_OPTIONAL
    | plugin_pb2.CodeGeneratorResponse.FEATURE_SUPPORTS_EDITIONS
)


def configure_logging(level: int) -> None:
    """Send the package's logs to stderr; stdout carries the response."""
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("protoc-gen-rust-grpc: %(levelname)s: %(message)s"))
        logger.addHandler(handler)
        logger.propagate = False
    logger.setLevel(level)


def _new_response() -> plugin_pb2.CodeGeneratorResponse:
    response = plugin_pb2.CodeGeneratorResponse()
    response.supported_features = _SUPPORTED_FEATURES
    response.minimum_edition = descriptor_pb2.EDITION_PROTO2
    response.maximum_edition = descriptor_pb2.EDITION_2023
    return response


def generate_code(request: plugin_pb2.CodeGeneratorRequest) -> plugin_pb2.CodeGeneratorResponse:
    """Run the generator over every file protoc asked for.

    Options are only read once some requested file declares a service. Any
    configuration error discards every generated file.
    """
    files = {f.name: f for f in request.proto_file}
    to_generate = [files[name] for name in request.file_to_generate]
    if not any(file_proto.service for file_proto in to_generate):
        logger.debug("No services in %d requested files", len(to_generate))
        return _new_response()

    response = _new_response()
    try:
        options = Options.parse(request.parameter)
        configure_logging(options.log_level_value)
        for key in options.ignored:
            logger.debug("Ignoring option %r", key)
        crate_mapping = load_crate_mapping(options.crate_mapping) if options.crate_mapping else {}

        resolver = TypePathResolver(request.proto_file, crate_mapping, request.file_to_generate)
        context = ResponseContext(response)
        generated = sum(generate_file(f, resolver, context) for f in to_generate)
    except ConfigurationError as err:
        logger.error("%s", err)
        response = _new_response()
        response.error = str(err)
        return response

    logger.debug("Generated %d of %d requested files", generated, len(to_generate))
    return response


def main() -> None:
    request = plugin_pb2.CodeGeneratorRequest.FromString(sys.stdin.buffer.read())
    response = generate_code(request)
    sys.stdout.buffer.write(response.SerializeToString(deterministic=True))


if __name__ == "__main__":
    main()
