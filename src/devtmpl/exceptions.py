"""Custom exception hierarchy for devtmpl."""

__all__ = [
    "CompileError",
    "ConfigError",
    "DevtmplError",
    "ParseError",
    "PipelineError",
    "RegistryError",
    "ScanError",
]


class DevtmplError(Exception):
    """Base exception for all devtmpl errors."""


class ConfigError(DevtmplError):
    """Raised when configuration loading or saving fails."""


class ScanError(DevtmplError):
    """Raised when the template directory cannot be traversed."""


class ParseError(DevtmplError):
    """Raised when a template file cannot be read, decoded or classified."""


class RegistryError(DevtmplError):
    """Raised when a template cannot be added to the registry."""


class CompileError(DevtmplError):
    """Raised when rendering or writing generated output fails."""


class PipelineError(DevtmplError):
    """Raised when pipeline orchestration fails."""
