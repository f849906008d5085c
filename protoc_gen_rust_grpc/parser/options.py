"""Parse the parameter string protoc passes to the plugin."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from protoc_gen_rust_grpc.errors import ConfigurationError

_KERNELS = ("upb", "cpp")
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_KNOWN_KEYS = {"kernel", "bazel_crate_mapping", "log_level"}


def parse_parameter(parameter: str) -> list[tuple[str, str]]:
    """Split ``key[=value],key[=value]`` into (key, value) pairs.

    kernel=upb,bazel_crate_mapping=map.txt -> [("kernel", "upb"), ("bazel_crate_mapping", "map.txt")]
    experimental -> [("experimental", "")]
    """
    pairs: list[tuple[str, str]] = []
    for chunk in parameter.split(","):
        if not chunk:
            continue
        key, _, value = chunk.partition("=")
        pairs.append((key.strip(), value.strip()))
    return pairs


@dataclass(frozen=True)
class Options:
    kernel: str
    crate_mapping: str | None = None
    log_level: str = "WARNING"
    ignored: tuple[str, ...] = ()  # keys meant for other protobuf Rust generators

    @property
    def log_level_value(self) -> int:
        return logging.getLevelName(self.log_level)

    @classmethod
    def parse(cls, parameter: str) -> Options:
        """Build Options from the raw protoc parameter string.

        Keys this plugin does not use (e.g. generated_entry_point_rs_file_name)
        are collected in ``ignored`` rather than rejected.
        """
        values: dict[str, str] = {}
        ignored: list[str] = []
        for key, value in parse_parameter(parameter):
            if key in _KNOWN_KEYS:
                values[key] = value
            else:
                ignored.append(key)

        kernel = values.get("kernel")
        if not kernel:
            raise ConfigurationError(
                "Mandatory option `kernel` missing, please specify `cpp` or `upb`."
            )
        if kernel not in _KERNELS:
            raise ConfigurationError(
                f"Unknown kernel {kernel!r}, please specify `cpp` or `upb`."
            )

        log_level = values.get("log_level", "WARNING").upper()
        if log_level not in _LOG_LEVELS:
            raise ConfigurationError(f"Unknown log level: {values['log_level']!r}")

        if "bazel_crate_mapping" in values and not values["bazel_crate_mapping"]:
            raise ConfigurationError("Option `bazel_crate_mapping` requires a file path")

        return cls(
            kernel=kernel,
            crate_mapping=values.get("bazel_crate_mapping"),
            log_level=log_level,
            ignored=tuple(ignored),
        )
