"""Reading Turning model files."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .errors import SchemaLoadError, SchemaValidationError
from .models import TurningModel


def load_yaml(path: str | Path) -> dict[str, Any]:
    """Read a model file into a plain mapping.

    An empty file is an empty model.

    Raises:
        SchemaLoadError: If the file is missing, unreadable, not YAML, or
            its top level is not a mapping.
    """
    path = Path(path)
    if not path.is_file():
        raise SchemaLoadError(f"File not found: {path}", str(path))

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise SchemaLoadError(f"Cannot read file: {e}", str(path)) from e

    return _load_mapping(text, str(path))


def parse_model(path: str | Path) -> TurningModel:
    """Read and validate a model file.

    Args:
        path: Path to the YAML model file.

    Returns:
        The validated model, ready for ``build_suite``.

    Raises:
        SchemaLoadError: If the file cannot be read as a YAML mapping.
        SchemaValidationError: If the mapping is not a valid model.
    """
    return _validate(load_yaml(path))


def parse_model_from_string(yaml_string: str) -> TurningModel:
    return _validate(_load_mapping(yaml_string))


def _load_mapping(text: str, source: str | None = None) -> dict[str, Any]:
    try:
        data = yaml.safe_load(text)
    except yaml.MarkedYAMLError as e:
        line = f" at line {e.problem_mark.line + 1}" if e.problem_mark else ""
        raise SchemaLoadError(f"Invalid YAML{line}: {e.problem}", source) from e
    except yaml.YAMLError as e:
        raise SchemaLoadError(f"Invalid YAML: {e}", source) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise SchemaLoadError(
            f"Expected YAML mapping at the top of the model, got {type(data).__name__}",
            source,
        )
    return data


def _validate(data: dict[str, Any]) -> TurningModel:
    try:
        return TurningModel.model_validate(data)
    except ValidationError as e:
        errors = [
            {
                "loc": ".".join(map(str, err["loc"])) or "model",
                "msg": err["msg"],
                "type": err["type"],
            }
            for err in e.errors()
        ]
        raise SchemaValidationError(
            f"{len(errors)} problem(s) in the model", errors
        ) from e
