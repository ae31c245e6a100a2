"""
Structural validation of raw resource records.

``validate_resource`` inspects an untrusted value (typically one entry
of a data file, before it is turned into a ``Resource``) and reports
every problem it finds instead of stopping at the first one. It never
raises. Field names are reported with their JSON spelling.
"""

from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Tuple

from pydantic import Field

from .schemas import (
    CATEGORY_IDS,
    CamelModel,
    DIFFICULTY_LEVELS,
    PLATFORMS,
    PRICE_TYPES,
    is_valid_platform,
)

REQUIRED_RESOURCE_FIELDS: Tuple[str, ...] = (
    "id",
    "name",
    "description",
    "category",
    "subcategory",
    "tags",
    "difficulty",
    "priceType",
    "platforms",
    "url",
)

_REQUIRED_STRING_FIELDS = ("id", "name", "description", "subcategory", "url")

# field -> allowed values
_ENUM_FIELDS = (
    ("category", CATEGORY_IDS),
    ("difficulty", DIFFICULTY_LEVELS),
    ("priceType", PRICE_TYPES),
)


class FieldError(CamelModel):
    field: str
    reason: str


class ResourceValidationResult(CamelModel):
    success: bool
    missing_fields: List[str] = Field(default_factory=list)
    invalid_fields: List[FieldError] = Field(default_factory=list)


class IndexedValidationResult(CamelModel):
    index: int
    result: ResourceValidationResult


class ValidationReport(CamelModel):
    """Batch outcome: ``valid`` plus the failing entries only."""

    valid: bool
    results: List[IndexedValidationResult] = Field(default_factory=list)


def _is_non_empty_string(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _is_non_empty_list(value: Any) -> bool:
    return isinstance(value, (list, tuple)) and len(value) > 0


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_resource(resource: Any) -> ResourceValidationResult:
    """Validate one raw resource record.

    Parameters
    ----------
    resource : Any
        Usually a ``dict`` decoded from JSON. ``None`` or any other
        non-mapping value reports every required field as missing.

    Returns
    -------
    ResourceValidationResult
        ``missing_fields`` lists required fields that are absent or
        empty; ``invalid_fields`` lists present fields whose value is
        outside its enumeration or range.
    """
    if not isinstance(resource, Mapping):
        return ResourceValidationResult(
            success=False,
            missing_fields=list(REQUIRED_RESOURCE_FIELDS),
        )

    missing: List[str] = []
    invalid: List[FieldError] = []

    for field in _REQUIRED_STRING_FIELDS:
        if not _is_non_empty_string(resource.get(field)):
            missing.append(field)

    for field, allowed in _ENUM_FIELDS:
        value = resource.get(field)
        if not _is_non_empty_string(value):
            missing.append(field)
        elif value not in allowed:
            invalid.append(
                FieldError(
                    field=field,
                    reason=f"Invalid {field}: {value}. Must be one of: {', '.join(allowed)}",
                )
            )

    tags = resource.get("tags")
    if not _is_non_empty_list(tags):
        missing.append("tags")
    elif not all(_is_non_empty_string(t) for t in tags):
        invalid.append(FieldError(field="tags", reason="All tags must be non-empty strings"))

    platforms = resource.get("platforms")
    if not _is_non_empty_list(platforms):
        missing.append("platforms")
    else:
        bad = [p for p in platforms if not is_valid_platform(p)]
        if bad:
            invalid.append(
                FieldError(
                    field="platforms",
                    reason=(
                        f"Invalid platforms: {', '.join(str(p) for p in bad)}. "
                        f"Must be one of: {', '.join(PLATFORMS)}"
                    ),
                )
            )

    # Optional fields are absent only when the key is missing; null is a value.
    if "rating" in resource:
        rating = resource["rating"]
        if not _is_number(rating) or not 1 <= rating <= 5:
            invalid.append(FieldError(field="rating", reason="Rating must be a number between 1 and 5"))

    if "featured" in resource:
        if not isinstance(resource["featured"], bool):
            invalid.append(FieldError(field="featured", reason="Featured must be a boolean"))

    return ResourceValidationResult(
        success=not missing and not invalid,
        missing_fields=missing,
        invalid_fields=invalid,
    )


def validate_resources(resources: Iterable[Any]) -> ValidationReport:
    """Validate many records in one pass, keeping only the failures."""
    failures = []
    for index, resource in enumerate(resources):
        result = validate_resource(resource)
        if not result.success:
            failures.append(IndexedValidationResult(index=index, result=result))
    return ValidationReport(valid=not failures, results=failures)
