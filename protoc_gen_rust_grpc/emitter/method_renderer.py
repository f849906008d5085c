"""Render client methods from the per-cardinality Jinja templates."""

from __future__ import annotations

import functools
import logging
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined, UndefinedError

from protoc_gen_rust_grpc.errors import ContractViolation
from protoc_gen_rust_grpc.model.ir import Cardinality, MethodModel, ServiceModel
from protoc_gen_rust_grpc.parser.doc_comment import to_doc_comment
from protoc_gen_rust_grpc.parser.name_transform import format_method_path

logger = logging.getLogger(__name__)

_TEMPLATES_DIR = Path(__file__).parent.parent / "templates"

CODEC_NAME = "grpc::codec::ProtoCodec"

# Indentation of a method inside `pub mod x_client { impl ... { } }`
_METHOD_INDENT = " " * 8

METHOD_TEMPLATES: dict[Cardinality, str] = {
    Cardinality.UNARY: "client_unary.rs.j2",
    Cardinality.SERVER_STREAMING: "client_server_streaming.rs.j2",
    Cardinality.CLIENT_STREAMING: "client_client_streaming.rs.j2",
    Cardinality.BIDI_STREAMING: "client_bidi_streaming.rs.j2",
}


@functools.cache
def get_environment() -> Environment:
    """Jinja environment shared by every template in the package."""
    return Environment(
        loader=FileSystemLoader(str(_TEMPLATES_DIR)),
        undefined=StrictUndefined,
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )


def render_template(name: str, **placeholders: object) -> str:
    """Render a template, treating any unresolved placeholder as a bug."""
    template = get_environment().get_template(name)
    try:
        return template.render(**placeholders)
    except UndefinedError as err:
        raise ContractViolation(f"Unresolved placeholder in {name}: {err.message}") from err


def template_for(cardinality: Cardinality) -> str:
    """Pick the method template for a cardinality."""
    try:
        return METHOD_TEMPLATES[cardinality]
    except KeyError:
        raise ContractViolation(f"No method template for cardinality {cardinality!r}") from None


def method_placeholders(method: MethodModel, service: ServiceModel) -> dict[str, str]:
    return {
        "ident": method.name,
        "request": method.request_type,
        "response": method.response_type,
        "path": format_method_path(service, method),
        "codec_name": CODEC_NAME,
        "service_name": service.full_name,
        "method_name": method.proto_name,
    }


def render_method(method: MethodModel, service: ServiceModel) -> str:
    """Render one method: rustdoc, optional #[deprecated], then the call shape.

    The result carries no trailing newline.
    """
    template_name = template_for(method.cardinality)
    logger.debug("Rendering %s with %s", method.full_name, template_name)

    prefix = to_doc_comment(method.comment, indent=_METHOD_INDENT)
    if method.is_deprecated:
        prefix += _METHOD_INDENT + "#[deprecated]\n"
    body = render_template(template_name, **method_placeholders(method, service))
    return prefix + body.rstrip("\n")


def render_methods(service: ServiceModel) -> str:
    """Render every method in declaration order, one blank line between them."""
    return "\n\n".join(render_method(method, service) for method in service.methods)
