"""Name transformation utilities for converting proto names to Rust identifiers."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from protoc_gen_rust_grpc.errors import ContractViolation

if TYPE_CHECKING:
    from protoc_gen_rust_grpc.model.ir import MethodModel, ServiceModel

# Strict, reserved and edition-specific keywords in Rust
_RUST_KEYWORDS = {
    "as", "async", "await", "break", "const", "continue", "crate", "dyn",
    "else", "enum", "extern", "false", "fn", "for", "if", "impl", "in",
    "let", "loop", "match", "mod", "move", "mut", "pub", "ref", "return",
    "self", "Self", "static", "struct", "super", "trait", "true", "type",
    "unsafe", "use", "where", "while", "abstract", "become", "box", "do",
    "final", "gen", "macro", "override", "priv", "try", "typeof", "unsized",
    "virtual", "yield",
}

# Keywords that are not accepted as raw identifiers (r#self is an error)
_NOT_RAW_IDENTIFIERS = {"crate", "self", "super", "Self"}

_NOT_RAW_SUFFIX = "__mangled_because_ident_isnt_a_legal_raw_identifier"


class CaseConvention(Enum):
    SNAKE = "snake"
    UPPER_CAMEL = "upper_camel"


def camel_to_snake(s: str) -> str:
    """Convert camelCase/PascalCase to snake_case, one character at a time.

    Examples:
        GetFeature -> get_feature
        RouteGuide -> route_guide
        GetHTTPThing -> get_h_t_t_p_thing
        already_snake -> already_snake
    """
    result = []
    prev = ""
    for i, c in enumerate(s):
        if i > 0 and c.isascii() and c.isupper() and prev != "_":
            result.append("_")
        result.append(c.lower() if c.isascii() else c)
        prev = c
    return "".join(result)


def snake_to_upper_camel(s: str) -> str:
    """Convert snake_case to UpperCamelCase, the way protoc names C++ classes.

    A lowercase letter is capitalized at the start, after a digit and after
    any non-alphanumeric character; those other characters are dropped.
    Uppercase letters and digits are kept as they are.

    Examples:
        route_guide -> RouteGuide
        RouteGuide -> RouteGuide
        http_API_v2 -> HttpAPIV2
        echo2service -> Echo2Service
        foo.bar-baz -> FooBarBaz
    """
    result = []
    cap_next = True
    for c in s:
        if "a" <= c <= "z":
            result.append(c.upper() if cap_next else c)
            cap_next = False
        elif "A" <= c <= "Z":
            result.append(c)
            cap_next = False
        elif "0" <= c <= "9":
            result.append(c)
            cap_next = True
        else:
            cap_next = True
    return "".join(result)


def rust_safe_name(name: str) -> str:
    """Escape a name that collides with a Rust keyword.

    type -> r#type
    self -> self__mangled_because_ident_isnt_a_legal_raw_identifier
    feature -> feature
    """
    if name in _NOT_RAW_IDENTIFIERS:
        return name + _NOT_RAW_SUFFIX
    if name in _RUST_KEYWORDS:
        return "r#" + name
    return name


def to_identifier(raw: str, convention: CaseConvention) -> str:
    """Rewrite a proto name under ``convention`` and escape Rust keywords."""
    if not raw:
        raise ContractViolation("identifier conversion called with an empty name")
    if convention is CaseConvention.SNAKE:
        converted = camel_to_snake(raw)
    elif convention is CaseConvention.UPPER_CAMEL:
        converted = snake_to_upper_camel(raw)
    else:
        raise ContractViolation(f"unknown case convention: {convention!r}")
    if not converted:
        raise ContractViolation(f"identifier conversion of {raw!r} produced an empty name")
    return rust_safe_name(converted)


def method_ident(name: str) -> str:
    """GetFeature -> get_feature"""
    return to_identifier(name, CaseConvention.SNAKE)


def service_ident(name: str) -> str:
    """route_guide -> RouteGuide"""
    return to_identifier(name, CaseConvention.UPPER_CAMEL)


def client_module_name(service_name: str) -> str:
    """RouteGuide -> route_guide_client"""
    return camel_to_snake(service_name) + "_client"


def client_struct_name(service_name: str) -> str:
    """RouteGuide -> RouteGuideClient"""
    return service_name + "Client"


def format_method_path(service: ServiceModel, method: MethodModel) -> str:
    """Build the wire path for a method: /routeguide.RouteGuide/GetFeature.

    Uses the names as declared in the .proto file; never the escaped Rust idents.
    """
    return f"/{service.full_name}/{method.proto_name}"
