"""Resolve proto message references to Rust type paths."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from google.protobuf import descriptor_pb2

from protoc_gen_rust_grpc.errors import ConfigurationError, ContractViolation
from protoc_gen_rust_grpc.parser.name_transform import camel_to_snake, rust_safe_name

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _MessageLocation:
    file_name: str
    scopes: tuple[str, ...]  # enclosing message names, outermost first
    name: str


def load_crate_mapping(path: str | Path) -> dict[str, str]:
    """Read a crate mapping file into {proto import path: crate name}.

    The file holds repeated records of a crate name line, a file count line
    and that many .proto paths:

        googleapis
        2
        google/api/annotations.proto
        google/api/http.proto
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as err:
        raise ConfigurationError(f"Cannot read crate mapping {str(path)!r}: {err}") from err

    lines = [line.strip() for line in text.splitlines()]
    mapping: dict[str, str] = {}
    i = 0
    while i < len(lines):
        crate = lines[i]
        if not crate:
            i += 1
            continue
        if i + 1 >= len(lines):
            raise ConfigurationError(f"Crate mapping {str(path)!r}: missing file count for {crate!r}")
        try:
            count = int(lines[i + 1])
        except ValueError:
            raise ConfigurationError(
                f"Crate mapping {str(path)!r}: expected a file count for {crate!r}, got {lines[i + 1]!r}"
            ) from None
        files = lines[i + 2:i + 2 + count]
        if len(files) < count or not all(files):
            raise ConfigurationError(
                f"Crate mapping {str(path)!r}: crate {crate!r} lists fewer than {count} files"
            )
        for proto_path in files:
            mapping[proto_path] = crate
        i += 2 + count
    logger.debug("Loaded crate mapping for %d files from %s", len(mapping), path)
    return mapping


class TypePathResolver:
    """Map fully-qualified message names (".pkg.Outer.Inner") to Rust paths.

    Messages in files of the crate being generated (``crate_files``, every
    indexed file when not given) resolve to ``crate::...``; files listed in the
    crate mapping resolve to ``::<crate>::...``. Nested messages live in a
    module named after the snake_case of their parent.
    """

    def __init__(
        self,
        files: Iterable[descriptor_pb2.FileDescriptorProto],
        crate_mapping: dict[str, str] | None = None,
        crate_files: Iterable[str] | None = None,
    ) -> None:
        self._crate_mapping = dict(crate_mapping or {})
        self._messages: dict[str, _MessageLocation] = {}
        indexed = []
        for file_proto in files:
            self._index_file(file_proto)
            indexed.append(file_proto.name)
        self._crate_files = set(indexed if crate_files is None else crate_files)

    def _index_file(self, file_proto: descriptor_pb2.FileDescriptorProto) -> None:
        prefix = f".{file_proto.package}" if file_proto.package else ""
        for message in file_proto.message_type:
            self._index_message(file_proto.name, prefix, (), message)

    def _index_message(
        self,
        file_name: str,
        prefix: str,
        scopes: tuple[str, ...],
        message: descriptor_pb2.DescriptorProto,
    ) -> None:
        full_name = f"{prefix}.{message.name}"
        self._messages[full_name] = _MessageLocation(file_name, scopes, message.name)
        for nested in message.nested_type:
            if nested.options.map_entry:
                continue
            self._index_message(file_name, full_name, scopes + (message.name,), nested)

    def resolve(self, type_name: str) -> str:
        """.routeguide.Point -> crate::Point"""
        location = self._messages.get(type_name)
        if location is None:
            raise ContractViolation(f"Message type {type_name!r} is not declared in any input file")

        segments = [rust_safe_name(camel_to_snake(scope)) for scope in location.scopes]
        segments.append(rust_safe_name(location.name))

        crate = self._crate_mapping.get(location.file_name)
        if crate:
            root = f"::{crate}"
        elif location.file_name in self._crate_files:
            root = "crate"
        else:
            raise ConfigurationError(
                f"{location.file_name!r} (defining {type_name[1:]!r}) is not part of the crate "
                "being generated and has no entry in the crate mapping"
            )
        return "::".join([root] + segments)
