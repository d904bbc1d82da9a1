"""Application environment: configuration, errors, registry and loaders."""

from noxt.environment.config import DEFAULT_CONFIG, AppConfig
from noxt.environment.exceptions import (
    BoundaryFailureError,
    ContextKeyError,
    DuplicateNameError,
    ErrorCode,
    InvalidIdentifierError,
    LoadError,
    MethodNotAllowedError,
    MissingRouteParamError,
    NoxtError,
    RegistrationError,
    RegistryFrozenError,
    RenderError,
)
from noxt.environment.loaders import ChoiceLoader, DictLoader, FileSystemLoader
from noxt.environment.registry import ComponentRegistry

__all__ = [
    "DEFAULT_CONFIG",
    "AppConfig",
    "BoundaryFailureError",
    "ChoiceLoader",
    "ComponentRegistry",
    "ContextKeyError",
    "DictLoader",
    "DuplicateNameError",
    "ErrorCode",
    "FileSystemLoader",
    "InvalidIdentifierError",
    "LoadError",
    "MethodNotAllowedError",
    "MissingRouteParamError",
    "NoxtError",
    "RegistrationError",
    "RegistryFrozenError",
    "RenderError",
]
