"""Result records produced during a creation run."""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class RequirementSubject(str, Enum):
    RUNTIME = "runtime"
    CONTAINER_ENGINE = "container-engine"
    DOMAIN_COMPILER = "domain-compiler"


@dataclass(frozen=True)
class RequirementCheck:
    """Result of probing one prerequisite."""

    subject: RequirementSubject
    passed: bool
    name: str
    observed_version: Optional[str] = None
    required_version: Optional[str] = None
    remedy_hint: str = ""

    @property
    def is_missing(self) -> bool:
        """True when the tool could not be found at all."""
        return not self.passed and self.observed_version is None


class FailurePolicy(str, Enum):
    """How a step failure affects the rest of the run."""

    FATAL = "fatal"
    RECOVERABLE = "recoverable"
    ADVISORY = "advisory"


class StepStatus(str, Enum):
    SUCCEEDED = "succeeded"
    WARNED = "warned"
    FAILED = "failed"


@dataclass(frozen=True)
class StepOutcome:
    step_id: str
    status: StepStatus
    detail: str = ""
    remedy: Optional[str] = None


@dataclass
class CreationReport:
    """Ledger of step outcomes accumulated by the orchestrator."""

    project_path: str
    template: str
    outcomes: List[StepOutcome] = field(default_factory=list)

    def record(self, outcome: StepOutcome) -> None:
        self.outcomes.append(outcome)

    def get(self, step_id: str) -> Optional[StepOutcome]:
        for outcome in self.outcomes:
            if outcome.step_id == step_id:
                return outcome
        return None

    @property
    def failed(self) -> bool:
        return any(o.status == StepStatus.FAILED for o in self.outcomes)

    @property
    def warnings(self) -> List[StepOutcome]:
        return [o for o in self.outcomes if o.status == StepStatus.WARNED]
