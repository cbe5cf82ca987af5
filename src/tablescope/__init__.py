"""Database introspection drivers with canonical row values."""

from .errors import (
    BackendConnectionError,
    ConfigError,
    ConversionError,
    DriverError,
    FeatureNotImplementedError,
    GuardrailError,
    QueryError,
)
from .models import ColumnDescriptor, ConstraintInfo, ForeignKeyInfo, IndexInfo, RecordSet, Row

__all__ = [
    "BackendConnectionError",
    "ColumnDescriptor",
    "ConfigError",
    "ConstraintInfo",
    "ConversionError",
    "DriverError",
    "FeatureNotImplementedError",
    "ForeignKeyInfo",
    "GuardrailError",
    "IndexInfo",
    "QueryError",
    "RecordSet",
    "Row",
]
