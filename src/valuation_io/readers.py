"""
Valuation I/O Readers

YAML and JSON assumption file parsing.

A file holds either a flat assumption mapping or a wrapper of the form
``{assumptions: {...}, metadata: {...}}``. Keys may be snake_case or
camelCase. Metadata is opaque and only carried through to display/export.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field

from valuation_engine.logging_config import get_logger
from valuation_engine.models import AssumptionSet

logger = get_logger(__name__)


class InputFileError(Exception):
    """Raised when an assumption file cannot be read or parsed."""


class AssumptionFile(BaseModel):
    """Parsed assumption file."""
    assumptions: AssumptionSet
    metadata: Optional[dict[str, Any]] = None
    source: Optional[str] = Field(None, description="Path the file was read from")


def _known_keys() -> set[str]:
    keys = set()
    for name, info in AssumptionSet.model_fields.items():
        keys.add(name)
        if info.alias:
            keys.add(info.alias)
    return keys


def parse_input_dict(data: Any) -> AssumptionFile:
    """
    Parse a decoded assumption document.

    Args:
        data: Mapping loaded from YAML or JSON

    Returns:
        AssumptionFile with validated assumptions

    Raises:
        InputFileError: If the document is not a mapping
        pydantic.ValidationError: If an assumption breaks a hard constraint
    """
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise InputFileError(f"Expected a mapping of assumptions, got {type(data).__name__}")

    metadata = None
    if "assumptions" in data:
        metadata = data.get("metadata")
        if metadata is not None and not isinstance(metadata, dict):
            raise InputFileError("'metadata' must be a mapping")
        data = data["assumptions"] or {}
        if not isinstance(data, dict):
            raise InputFileError("'assumptions' must be a mapping")

    unknown = sorted(set(data) - _known_keys())
    if unknown:
        logger.warning("Ignoring unknown assumption keys: %s", ", ".join(map(str, unknown)))

    return AssumptionFile(assumptions=AssumptionSet.model_validate(data), metadata=metadata)


def read_yaml(path: str | Path) -> AssumptionFile:
    """
    Read assumptions from a YAML file.

    Args:
        path: Path to YAML file

    Returns:
        AssumptionFile model
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise InputFileError(f"Cannot read {path}: {e}") from e
    except yaml.YAMLError as e:
        raise InputFileError(f"Malformed YAML in {path}: {e}") from e

    return parse_input_dict(data)


def read_json(path: str | Path) -> AssumptionFile:
    """
    Read assumptions from a JSON file.

    Args:
        path: Path to JSON file

    Returns:
        AssumptionFile model
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise InputFileError(f"Cannot read {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise InputFileError(f"Malformed JSON in {path}: {e}") from e

    return parse_input_dict(data)


def read_input_file(path: str | Path) -> AssumptionFile:
    """
    Read assumptions from a file (auto-detects format).

    Args:
        path: Path to input file (YAML or JSON)

    Returns:
        AssumptionFile model
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix in (".yaml", ".yml"):
        parsed = read_yaml(path)
    elif suffix == ".json":
        parsed = read_json(path)
    else:
        raise InputFileError(f"Unsupported file format: {suffix or '(none)'}")

    logger.info("Loaded assumptions from %s", path)
    return parsed.model_copy(update={"source": str(path)})
