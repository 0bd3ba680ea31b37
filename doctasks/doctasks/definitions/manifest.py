"""YAML manifests: declarations as data instead of Python calls."""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..core.models import Declaration


class DefinitionError(ValueError):
    """Raised when a definition file cannot be read or is malformed."""


class Manifest(BaseModel):
    """Contents of a YAML definition file."""

    model_config = ConfigDict(extra="forbid")

    include: list[str] = Field(
        default_factory=list, description="Definition files relative to this one"
    )
    targets: list[Declaration] = Field(
        default_factory=list, description="Declarations tagged by 'kind'"
    )


def read_manifest(path: Path) -> Manifest:
    """Parse and validate a YAML manifest.

    Args:
        path: Manifest file path

    Returns:
        Validated manifest
    """
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise DefinitionError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return Manifest()
    if not isinstance(data, dict):
        raise DefinitionError(f"{path}: expected a mapping at the top level")

    try:
        return Manifest.model_validate(data)
    except ValidationError as e:
        raise DefinitionError(f"{path}: {e}") from e
