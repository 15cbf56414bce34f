"""Creation request model: the resolved inputs of one run."""
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from create_mn_app.core.validation import validate_project_name
from create_mn_app.models.template import TemplateDescriptor

PackageManagerName = Literal["npm", "yarn", "pnpm", "bun"]


class CreationRequest(BaseModel):
    """Immutable set of inputs driving one orchestration run."""

    model_config = ConfigDict(extra='forbid', frozen=True)

    project_name: str
    project_path: Path
    template: TemplateDescriptor
    package_manager: PackageManagerName = "npm"
    skip_install: bool = False
    skip_git: bool = False
    overwrite: bool = Field(
        False, description="Destination exists and the operator confirmed its removal"
    )

    @field_validator('project_name')
    @classmethod
    def validate_name(cls, v):
        """Reject names that fail validation before any filesystem work."""
        result = validate_project_name(v)
        if not result.valid:
            raise ValueError(result.problems[0])
        return v

    @field_validator('project_path')
    @classmethod
    def validate_path(cls, v):
        if not v.is_absolute():
            raise ValueError(f"Project path must be absolute. Got: {v}")
        return v

    @model_validator(mode='after')
    def validate_template_selectable(self) -> 'CreationRequest':
        if not self.template.is_available:
            raise ValueError(f"Template '{self.template.name}' is not available yet")
        return self
