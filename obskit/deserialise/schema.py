"""
Schema validation for decoded metric definitions.

Decoded documents are plain lists and dicts. DefinitionValidator checks each
entry against the schema for its ``metric_type`` and collects every problem
it finds, so a single error can report all of them at once.
"""

from typing import Any, Dict, List, Mapping, Optional

from obskit.core.enums import MetricKind

METRIC_TYPE_FIELD = "metric_type"
VALUE_FIELD = "value"
BUCKETS_FIELD = "buckets"

U64_MAX = 2 ** 64 - 1
I64_MIN = -(2 ** 63)
I64_MAX = 2 ** 63 - 1

# Required fields per metric type
DEFINITION_SCHEMAS: Dict[MetricKind, Dict[str, type]] = {
    MetricKind.COUNTER: {'title': str, 'description': str},
    MetricKind.GAUGE: {'title': str, 'description': str},
    MetricKind.HISTOGRAM: {'title': str, 'description': str},
}

# Inclusive integer range accepted for ``value``
VALUE_RANGES = {
    MetricKind.COUNTER: (0, U64_MAX),
    MetricKind.GAUGE: (I64_MIN, I64_MAX),
}


class ValidationIssue:
    """A single schema violation."""

    def __init__(self, message: str, field: Optional[str] = None, value: Any = None):
        self.message = message
        self.field = field
        self.value = value

    def __str__(self):
        return self.message


class ValidationResult:
    """Result of validating one or more definitions."""

    def __init__(self, is_valid: bool = True, errors: Optional[List[ValidationIssue]] = None):
        self.is_valid = is_valid
        self.errors = errors or []

    def add_error(self, error: ValidationIssue):
        self.errors.append(error)
        self.is_valid = False

    def merge(self, other: "ValidationResult"):
        for error in other.errors:
            self.add_error(error)

    def __bool__(self):
        return self.is_valid


def _is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class DefinitionValidator:
    """Validates decoded definition entries against DEFINITION_SCHEMAS."""

    def validate_document(self, document: Any) -> ValidationResult:
        """Validate a whole decoded document (expected to be a list)."""
        result = ValidationResult()
        if not isinstance(document, list):
            result.add_error(ValidationIssue(
                f"expected a list of metric definitions, got {type(document).__name__}",
                value=document
            ))
            return result

        for index, entry in enumerate(document):
            result.merge(self.validate_entry(entry, index))
        return result

    def validate_entry(self, entry: Any, index: int = 0) -> ValidationResult:
        result = ValidationResult()
        path = f"[{index}]"

        if not isinstance(entry, Mapping):
            result.add_error(ValidationIssue(
                f"{path} must be a mapping, got {type(entry).__name__}", value=entry
            ))
            return result

        kind = self._resolve_kind(entry, path, result)
        if kind is None:
            return result

        for key, expected_type in DEFINITION_SCHEMAS[kind].items():
            full_path = f"{path}.{key}"
            if key not in entry:
                result.add_error(ValidationIssue(f"Missing required field: {full_path}", field=key))
            elif not isinstance(entry[key], expected_type):
                result.add_error(ValidationIssue(
                    f"Field {full_path} must be of type {expected_type.__name__}, got {type(entry[key]).__name__}",
                    field=key, value=entry[key]
                ))

        if kind in VALUE_RANGES and VALUE_FIELD in entry:
            self._validate_value(entry[VALUE_FIELD], kind, f"{path}.{VALUE_FIELD}", result)

        if kind is MetricKind.HISTOGRAM and BUCKETS_FIELD in entry:
            self._validate_buckets(entry[BUCKETS_FIELD], f"{path}.{BUCKETS_FIELD}", result)

        return result

    def _resolve_kind(self, entry: Mapping, path: str, result: ValidationResult) -> Optional[MetricKind]:
        if METRIC_TYPE_FIELD not in entry:
            result.add_error(ValidationIssue(
                f"Missing required field: {path}.{METRIC_TYPE_FIELD}", field=METRIC_TYPE_FIELD
            ))
            return None
        raw = entry[METRIC_TYPE_FIELD]
        try:
            return MetricKind(raw)
        except ValueError:
            expected = ", ".join(kind.value for kind in MetricKind)
            result.add_error(ValidationIssue(
                f"Unknown {METRIC_TYPE_FIELD} {raw!r} at {path}, expected one of: {expected}",
                field=METRIC_TYPE_FIELD, value=raw
            ))
            return None

    def _validate_value(self, value: Any, kind: MetricKind, full_path: str, result: ValidationResult):
        if not _is_integer(value):
            result.add_error(ValidationIssue(
                f"Field {full_path} must be an integer, got {type(value).__name__}",
                field=VALUE_FIELD, value=value
            ))
            return
        low, high = VALUE_RANGES[kind]
        if not low <= value <= high:
            result.add_error(ValidationIssue(
                f"Field {full_path} out of range for {kind.value}: {value} not in [{low}, {high}]",
                field=VALUE_FIELD, value=value
            ))

    def _validate_buckets(self, buckets: Any, full_path: str, result: ValidationResult):
        if not isinstance(buckets, list):
            result.add_error(ValidationIssue(
                f"Field {full_path} must be a list, got {type(buckets).__name__}",
                field=BUCKETS_FIELD, value=buckets
            ))
            return
        for position, bound in enumerate(buckets):
            if not _is_number(bound):
                result.add_error(ValidationIssue(
                    f"Field {full_path}[{position}] must be a number, got {type(bound).__name__}",
                    field=BUCKETS_FIELD, value=bound
                ))
                continue
            try:
                float(bound)
            except OverflowError:
                result.add_error(ValidationIssue(
                    f"Field {full_path}[{position}] out of range for a floating point bucket bound",
                    field=BUCKETS_FIELD, value=bound
                ))
