"""Exception hierarchy for the k-NN pipeline.

Every stage is a pure computation over in-memory data, so nothing here is
retryable: errors are raised to the caller and end the batch run.
"""

from __future__ import annotations


class PipelineError(Exception):
    """Base class for all pipeline errors."""


class SchemaError(PipelineError):
    """Rows or labels do not match the declared dataset schema."""


class DegenerateColumnError(PipelineError):
    """A feature column is constant, so min-max scaling is undefined.

    Attributes:
        column: Name of the offending feature column.
    """

    def __init__(self, column: str) -> None:
        self.column = column
        super().__init__(
            f"Feature column {column!r} is constant; min-max normalization is undefined"
        )


class InvalidArgument(PipelineError, ValueError):
    """A caller-supplied parameter is outside its valid range."""
