"""Exceptions raised by the Rust gRPC generator."""

from __future__ import annotations


class GeneratorError(Exception):
    """Base class for generator failures."""


class ConfigurationError(GeneratorError):
    """Raised for malformed plugin parameters or crate mappings.

    Reported back to protoc through ``CodeGeneratorResponse.error``.
    """


class ContractViolation(GeneratorError):
    """Raised when an internal invariant of the generator is broken.

    These indicate a bug in the generator, not bad input, and are never caught.
    """
