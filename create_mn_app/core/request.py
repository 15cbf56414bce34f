"""Turns CLI flags and prompt answers into a CreationRequest.

Everything here is read-only: names and templates are validated and the
overwrite question is asked, but nothing on disk changes.
"""
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Tuple

from create_mn_app.core.errors import (
    InvalidDestinationError,
    InvalidProjectNameError,
    OperationCancelled,
    TemplateNotFoundError,
    TemplateUnavailableError,
)
from create_mn_app.core.logger import get_logger
from create_mn_app.core.registry import TemplateRegistry, get_registry
from create_mn_app.core.validation import validate_project_name
from create_mn_app.models.request import CreationRequest, PackageManagerName
from create_mn_app.models.template import TemplateDescriptor
from create_mn_app.prompts import Choice, Prompter
from create_mn_app.services.package_manager import detect_package_manager

logger = get_logger(__name__)

DEFAULT_PROJECT_NAME = "my-midnight-app"
DEFAULT_TEMPLATE = "hello-world"


@dataclass
class CreateOptions:
    """Flags accepted by the create command."""

    template: Optional[str] = None
    use_npm: bool = False
    use_yarn: bool = False
    use_pnpm: bool = False
    use_bun: bool = False
    skip_install: bool = False
    skip_git: bool = False
    verbose: bool = False


def _name_problem(value: str) -> Optional[str]:
    result = validate_project_name(value)
    return None if result.valid else result.problems[0]


class RequestResolver:
    """Resolves the inputs of one run, prompting for whatever is missing."""

    def __init__(
        self,
        prompter: Prompter,
        registry: Optional[TemplateRegistry] = None,
        detect: Callable[[], PackageManagerName] = detect_package_manager,
    ):
        self.prompter = prompter
        self.registry = registry or get_registry()
        self.detect = detect

    def resolve(self, project_directory: Optional[str], options: CreateOptions) -> CreationRequest:
        """Build the request.

        Raises:
            OperationCancelled: A prompt was aborted or overwrite was declined
            CreateAppError: Invalid name, unknown/unavailable template or
                unwritable destination
        """
        if not project_directory:
            project_directory = self.prompter.ask_text(
                "What is your project named?",
                default=DEFAULT_PROJECT_NAME,
                validate=_name_problem,
            )

        template = self.resolve_template(options.template)
        package_manager, detected = self.resolve_package_manager(options)
        logger.debug(f"Package manager: {package_manager} (detected={detected})")

        project_path = Path(project_directory).expanduser().resolve()
        project_name = project_path.name
        validation = validate_project_name(project_name)
        if not validation.valid:
            raise InvalidProjectNameError(project_name, validation.problems)

        overwrite = self.confirm_destination(project_path)

        return CreationRequest(
            project_name=project_name,
            project_path=project_path,
            template=template,
            package_manager=package_manager,
            skip_install=options.skip_install,
            skip_git=options.skip_git,
            overwrite=overwrite,
        )

    def resolve_template(self, name: Optional[str]) -> TemplateDescriptor:
        if name is None:
            name = self.prompter.ask_select(
                "Which template would you like to use?",
                [
                    Choice(
                        title=t.display_name if t.is_available else f"{t.display_name} (Coming Soon)",
                        value=t.name,
                        description=t.description,
                    )
                    for t in self.registry.list(include_unavailable=True)
                ],
            )

        template = self.registry.lookup(name)
        if template is None:
            suggestion = self.registry.suggest(name)
            raise TemplateNotFoundError(name, suggestion.name if suggestion else None)
        if not template.is_available:
            raise TemplateUnavailableError(name)
        return template

    def resolve_package_manager(self, options: CreateOptions) -> Tuple[PackageManagerName, bool]:
        """Explicit flags win in npm, yarn, pnpm, bun order; otherwise detect.

        Returns:
            Tuple of (package manager, whether it was auto-detected)
        """
        for flag, name in (
            (options.use_npm, 'npm'),
            (options.use_yarn, 'yarn'),
            (options.use_pnpm, 'pnpm'),
            (options.use_bun, 'bun'),
        ):
            if flag:
                return name, False
        return self.detect(), True

    def confirm_destination(self, project_path: Path) -> bool:
        """Check the destination; returns True if an existing path must be replaced."""
        parent = project_path.parent
        if not parent.is_dir():
            raise InvalidDestinationError(
                f"Parent directory {parent} does not exist",
                hint="Create it first or choose another location.",
            )
        if not os.access(parent, os.W_OK):
            raise InvalidDestinationError(
                f"Cannot write to {parent}",
                hint="Check directory permissions or choose another location.",
            )

        if not project_path.exists():
            return False

        if not self.prompter.ask_confirm(
            f"Directory {project_path.name} already exists. Overwrite?", default=False
        ):
            raise OperationCancelled()
        return True
