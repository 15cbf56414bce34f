"""Error taxonomy for project creation.

Every ``CreateAppError`` is fatal: it aborts the run and is rendered by the CLI
with its message and optional remedy hint. Recoverable and advisory step
failures never surface as exceptions past the orchestrator.
"""
from typing import List, Optional


class CreateAppError(Exception):
    """Base class for fatal creation errors."""

    def __init__(self, message: str, hint: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.hint = hint


class OperationCancelled(Exception):
    """Raised when the operator declines or aborts a prompt.

    Not a failure: the CLI exits 0.
    """


class InvalidProjectNameError(CreateAppError):
    """Raised when the project name fails validation."""

    def __init__(self, name: str, problems: List[str]):
        super().__init__(
            f"Invalid project name '{name}': {problems[0]}",
            hint="Use a lowercase, URL-safe name such as 'my-midnight-app'.",
        )
        self.name = name
        self.problems = problems


class InvalidDestinationError(CreateAppError):
    """Raised when the destination directory cannot be written."""


class TemplateNotFoundError(CreateAppError):
    """Raised when no template with the requested name exists."""

    def __init__(self, name: str, suggestion: Optional[str] = None):
        hint = f'Did you mean "{suggestion}"?' if suggestion else None
        super().__init__(f'Template "{name}" not found.', hint=hint)
        self.name = name
        self.suggestion = suggestion


class TemplateUnavailableError(CreateAppError):
    """Raised when the requested template is listed but coming soon."""

    def __init__(self, name: str):
        super().__init__(
            f'Template "{name}" is coming soon!',
            hint="Pick one of the available templates below.",
        )
        self.name = name


class RequirementsNotMetError(CreateAppError):
    """Raised when prerequisites are unmet after reconciliation."""


class RuntimeVersionError(CreateAppError):
    """Raised when the interpreter running the CLI is too old."""


class ScaffoldError(CreateAppError):
    """Raised when the bundled template tree cannot be materialized."""


class TemplateRootNotFoundError(ScaffoldError):
    """Raised when a bundled template directory does not exist."""

    def __init__(self, template_root):
        super().__init__(
            f'Template directory "{template_root}" not found',
            hint="Reinstall create-mn-app; the bundled templates are missing.",
        )
        self.template_root = template_root


class CloneError(CreateAppError):
    """Raised when a remote template repository cannot be cloned."""


class CommandError(Exception):
    """Raised by collaborators when a sub-process exits non-zero."""

    def __init__(self, command: List[str], returncode: int, stderr: str = ""):
        detail = stderr.strip().splitlines()[-1] if stderr.strip() else f"exit code {returncode}"
        super().__init__(f"{' '.join(command)} failed: {detail}")
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
