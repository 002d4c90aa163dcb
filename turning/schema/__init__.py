"""Schema layer for YAML model files."""

from .builder import build_suite
from .errors import SchemaError, SchemaLoadError, SchemaValidationError
from .loader import load_yaml, parse_model, parse_model_from_string
from .models import (
    DEFAULT_PATTERN,
    InitializeDefinition,
    StateDefinition,
    TransitionDefinition,
    TurningModel,
)

__all__ = [
    "DEFAULT_PATTERN",
    "InitializeDefinition",
    "SchemaError",
    "SchemaLoadError",
    "SchemaValidationError",
    "StateDefinition",
    "TransitionDefinition",
    "TurningModel",
    "build_suite",
    "load_yaml",
    "parse_model",
    "parse_model_from_string",
]
