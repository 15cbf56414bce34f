"""Data models for create-mn-app."""
from create_mn_app.models.outcome import (
    CreationReport,
    FailurePolicy,
    RequirementCheck,
    RequirementSubject,
    StepOutcome,
    StepStatus,
)
from create_mn_app.models.request import CreationRequest, PackageManagerName
from create_mn_app.models.template import Availability, TemplateDescriptor, TemplateKind

__all__ = [
    'Availability',
    'TemplateDescriptor',
    'TemplateKind',
    'CreationRequest',
    'PackageManagerName',
    'CreationReport',
    'FailurePolicy',
    'RequirementCheck',
    'RequirementSubject',
    'StepOutcome',
    'StepStatus',
]
