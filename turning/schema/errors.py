"""Exceptions raised while reading model files."""


class SchemaError(Exception):
    """Base class for model file errors."""


class SchemaLoadError(SchemaError):
    """The model file is missing, unreadable, or not a YAML mapping."""

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path


class SchemaValidationError(SchemaError):
    """The YAML mapping is not a valid model; ``errors`` lists each problem by location."""

    def __init__(self, message: str, errors: list[dict] | None = None):
        super().__init__(message)
        self.errors = list(errors or ())
