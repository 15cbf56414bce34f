"""Template descriptor model for the starter template catalog."""
import re
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class TemplateKind(str, Enum):
    """How a template is realized on disk."""

    BUNDLED = "bundled"
    REMOTE = "remote"


class Availability(str, Enum):
    """Whether a template can be selected today."""

    AVAILABLE = "available"
    COMING_SOON = "coming-soon"


class TemplateDescriptor(BaseModel):
    """One selectable starter template.

    Bundled templates ship inside the package and are scaffolded locally.
    Remote templates are cloned from ``repository`` (``owner/name`` on the
    configured git host) and may require the Compact compiler.
    """

    model_config = ConfigDict(extra='forbid', frozen=True, populate_by_name=True)

    name: str = Field(..., description="Unique catalog key, used with --template")
    display_name: str = Field(..., alias="display")
    description: str = ""
    availability: Availability = Availability.AVAILABLE
    kind: TemplateKind = Field(TemplateKind.BUNDLED, alias="type")
    repository: Optional[str] = Field(None, alias="repo")
    minimum_runtime_version: Optional[str] = Field(None, alias="node_version")
    requires_compiler: bool = Field(False, alias="requires_compact_compiler")
    compiler_version: Optional[str] = Field(None, alias="compact_version")
    strip_contracts: bool = False

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        """Template names are lowercase kebab-case."""
        if not re.match(r'^[a-z0-9]+(-[a-z0-9]+)*$', v):
            raise ValueError(f"Template name '{v}' must be lowercase kebab-case")
        return v

    @field_validator('minimum_runtime_version', 'compiler_version', mode='before')
    @classmethod
    def coerce_version(cls, v):
        """YAML reads ``22`` as an int; versions are kept as strings."""
        return str(v) if v is not None else None

    @model_validator(mode='after')
    def validate_kind_invariants(self) -> 'TemplateDescriptor':
        """A repository is present iff remote; a compiler version only when required."""
        if self.kind == TemplateKind.REMOTE and not self.repository:
            raise ValueError(f"Remote template '{self.name}' requires repo")
        if self.kind == TemplateKind.BUNDLED and self.repository:
            raise ValueError(f"Bundled template '{self.name}' must not set repo")
        if self.compiler_version and not self.requires_compiler:
            raise ValueError(
                f"Template '{self.name}' sets compact_version without requiring the compiler"
            )
        return self

    @property
    def is_available(self) -> bool:
        return self.availability == Availability.AVAILABLE

    @property
    def is_remote(self) -> bool:
        return self.kind == TemplateKind.REMOTE
