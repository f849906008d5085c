"""Adapt protobuf service descriptors into IR objects."""

from __future__ import annotations

import logging

from google.protobuf import descriptor_pb2

from protoc_gen_rust_grpc.model.ir import Cardinality, FileModel, MethodModel, ServiceModel
from protoc_gen_rust_grpc.parser.name_transform import method_ident, service_ident
from protoc_gen_rust_grpc.parser.type_path import TypePathResolver

logger = logging.getLogger(__name__)

# Field numbers used in SourceCodeInfo.Location.path
_FILE_SERVICE_FIELD = 6  # FileDescriptorProto.service
_SERVICE_METHOD_FIELD = 2  # ServiceDescriptorProto.method


def get_comment(file_proto: descriptor_pb2.FileDescriptorProto, path: list[int]) -> str:
    """Return the leading comment at ``path``, else the trailing one, else ""."""
    for location in file_proto.source_code_info.location:
        if list(location.path) == path:
            return location.leading_comments or location.trailing_comments
    return ""


def adapt_method(
    file_proto: descriptor_pb2.FileDescriptorProto,
    service_full_name: str,
    service_index: int,
    method_index: int,
    resolver: TypePathResolver,
) -> MethodModel:
    """Build a MethodModel for ``file.service[service_index].method[method_index]``."""
    method = file_proto.service[service_index].method[method_index]
    path = [_FILE_SERVICE_FIELD, service_index, _SERVICE_METHOD_FIELD, method_index]
    return MethodModel(
        name=method_ident(method.name),
        proto_name=method.name,
        full_name=f"{service_full_name}.{method.name}",
        cardinality=Cardinality.from_flags(method.client_streaming, method.server_streaming),
        request_type=resolver.resolve(method.input_type),
        response_type=resolver.resolve(method.output_type),
        comment=get_comment(file_proto, path),
        is_deprecated=method.options.deprecated,
    )


def adapt_service(
    file_proto: descriptor_pb2.FileDescriptorProto,
    service_index: int,
    resolver: TypePathResolver,
) -> ServiceModel:
    """Build a ServiceModel (with its methods, in declaration order)."""
    service = file_proto.service[service_index]
    if file_proto.package:
        full_name = f"{file_proto.package}.{service.name}"
    else:
        full_name = service.name

    methods = tuple(
        adapt_method(file_proto, full_name, service_index, i, resolver)
        for i in range(len(service.method))
    )
    logger.debug("Adapted service %s with %d methods", full_name, len(methods))
    return ServiceModel(
        name=service_ident(service.name),
        proto_name=service.name,
        full_name=full_name,
        methods=methods,
        comment=get_comment(file_proto, [_FILE_SERVICE_FIELD, service_index]),
    )


def adapt_file(
    file_proto: descriptor_pb2.FileDescriptorProto,
    resolver: TypePathResolver,
) -> FileModel:
    """Build a FileModel holding every service declared in ``file_proto``."""
    services = tuple(
        adapt_service(file_proto, i, resolver) for i in range(len(file_proto.service))
    )
    return FileModel(name=file_proto.name, services=services)
