"""Creation orchestrator: runs the ordered creation steps for one request.

Each step is a descriptor tagged with a failure policy. The orchestrator walks
the list uniformly:

- fatal: the run aborts with a non-zero exit; partial acquisition output is
  removed
- recoverable: a warning and a manual command are printed, the run continues
- advisory: a warning is printed, the run continues

Remote templates never touch the filesystem before their requirements pass.
"""
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Optional

from rich.console import Console
from rich.markup import escape

from create_mn_app.core.errors import CreateAppError, OperationCancelled, RequirementsNotMetError
from create_mn_app.core.logger import console as default_console
from create_mn_app.core.logger import get_logger
from create_mn_app.core.reconciler import VersionReconciler
from create_mn_app.core.requirements import RequirementVerifier
from create_mn_app.models.outcome import (
    CreationReport,
    FailurePolicy,
    RequirementSubject,
    StepOutcome,
    StepStatus,
)
from create_mn_app.models.request import CreationRequest
from create_mn_app.prompts import Prompter
from create_mn_app.scaffold.core import ScaffoldEngine
from create_mn_app.services.docker_probe import DockerProbe
from create_mn_app.services.git_manager import GitManager
from create_mn_app.services.package_manager import PackageInstaller, get_package_manager_info
from create_mn_app.services.wallet import WalletGenerator

logger = get_logger(__name__)

COMPILE_SCRIPT = "compile"

# Step id -> failure classification
FAILURE_POLICY: Dict[str, FailurePolicy] = {
    "requirements": FailurePolicy.FATAL,
    "prepare": FailurePolicy.FATAL,
    "scaffold": FailurePolicy.FATAL,
    "clone": FailurePolicy.FATAL,
    "environment": FailurePolicy.FATAL,
    "strip-contracts": FailurePolicy.RECOVERABLE,
    "install": FailurePolicy.RECOVERABLE,
    "git": FailurePolicy.RECOVERABLE,
    "container-engine": FailurePolicy.ADVISORY,
    "compile": FailurePolicy.RECOVERABLE,
}


class StepWarning(Exception):
    """Raised by a step that finished in a degraded but acceptable state."""

    def __init__(self, message: str, remedy: Optional[str] = None):
        super().__init__(message)
        self.remedy = remedy


class StepFailedError(CreateAppError):
    """A fatal step failed with an error that carries no hint of its own."""

    def __init__(self, step_id: str, message: str, hint: Optional[str] = None):
        super().__init__(message, hint=hint)
        self.step_id = step_id


def bundled(request: CreationRequest) -> bool:
    return not request.template.is_remote


def remote(request: CreationRequest) -> bool:
    return request.template.is_remote


@dataclass(frozen=True)
class Step:
    """One entry of the creation plan."""

    step_id: str
    label: str
    success: str
    action: Callable[[CreationRequest], Optional[str]]
    applies: Callable[[CreationRequest], bool] = lambda request: True
    remedy: Optional[Callable[[CreationRequest], str]] = None
    cleanup_on_failure: bool = False
    interactive: bool = False

    @property
    def policy(self) -> FailurePolicy:
        return FAILURE_POLICY[self.step_id]


class CreationOrchestrator:
    """Sequences verification, acquisition and follow-up steps."""

    def __init__(
        self,
        prompter: Optional[Prompter] = None,
        verifier: Optional[RequirementVerifier] = None,
        reconciler: Optional[VersionReconciler] = None,
        scaffold_engine: Optional[ScaffoldEngine] = None,
        git: Optional[GitManager] = None,
        docker: Optional[DockerProbe] = None,
        wallet: Optional[WalletGenerator] = None,
        installer_factory: Callable[[str], PackageInstaller] = PackageInstaller,
        console: Optional[Console] = None,
    ):
        self.console = console or default_console
        self.docker = docker or DockerProbe()
        self.verifier = verifier or RequirementVerifier(docker=self.docker, console=self.console)
        self.reconciler = reconciler or VersionReconciler(self.verifier, prompter=prompter)
        self.scaffold_engine = scaffold_engine or ScaffoldEngine()
        self.git = git or GitManager()
        self.wallet = wallet or WalletGenerator()
        self.installer_factory = installer_factory
        self.report: Optional[CreationReport] = None
        self.steps: List[Step] = self._build_steps()

    def _build_steps(self) -> List[Step]:
        return [
            Step("requirements", "Checking requirements...", "Requirements satisfied",
                 self._verify_requirements,
                 applies=lambda r: remote(r) and bool(
                     r.template.minimum_runtime_version or r.template.requires_compiler),
                 interactive=True),
            Step("prepare", "Preparing project directory...", "Project directory ready",
                 self._prepare_destination),
            Step("scaffold", "Creating project structure...", "Project structure created",
                 self._scaffold, applies=bundled, cleanup_on_failure=True),
            Step("clone", "Cloning template from GitHub...", "Template cloned",
                 self._clone, applies=remote, cleanup_on_failure=True),
            Step("environment", "Writing environment files...", "Environment files created",
                 self._write_environment, applies=bundled, cleanup_on_failure=True),
            Step("strip-contracts", "Removing contract sources...", "Contract sources removed",
                 self._strip_contracts,
                 applies=lambda r: remote(r) and r.template.strip_contracts),
            Step("install", "Installing dependencies...", "Dependencies installed",
                 self._install,
                 applies=lambda r: bundled(r) and not r.skip_install,
                 remedy=lambda r: get_package_manager_info(r.package_manager).install_command),
            Step("git", "Initializing git repository...", "Git repository initialized",
                 self._init_git, applies=lambda r: not r.skip_git),
            Step("container-engine", "Checking Docker for proof server...",
                 "Docker is ready for proof server", self._probe_container_engine),
            Step("compile", "Compiling initial contract...", "Contract compiled successfully",
                 self._compile,
                 applies=lambda r: bundled(r) and not r.skip_install,
                 remedy=lambda r: get_package_manager_info(r.package_manager)
                 .script_command(COMPILE_SCRIPT)),
        ]

    def plan(self, request: CreationRequest) -> List[Step]:
        """Steps that will run for this request, in order."""
        return [step for step in self.steps if step.applies(request)]

    def run(self, request: CreationRequest) -> CreationReport:
        """Execute the plan.

        Returns:
            Report of every step outcome

        Raises:
            CreateAppError: The first fatal step failure
            OperationCancelled: The operator aborted a prompt
        """
        report = CreationReport(project_path=str(request.project_path), template=request.template.name)
        self.report = report

        self.console.print(f"Creating a new Midnight app in [green]{escape(str(request.project_path))}[/green].")
        self.console.print(f"[dim]Template: [cyan]{escape(request.template.name)}[/cyan][/dim]\n")

        for step in self.plan(request):
            outcome = self._run_step(step, request)
            report.record(outcome)

        return report

    def _run_step(self, step: Step, request: CreationRequest) -> StepOutcome:
        logger.debug(f"Step {step.step_id} ({step.policy.value}): running")
        remedy = step.remedy(request) if step.remedy else None

        try:
            if step.interactive:
                detail = step.action(request)
            else:
                with self.console.status(f"[cyan]{step.label}[/cyan]", spinner="dots"):
                    detail = step.action(request)
        except OperationCancelled:
            raise
        except StepWarning as warning:
            self._print_warning(str(warning), warning.remedy or remedy)
            logger.debug(f"Step {step.step_id}: warned ({warning})")
            return StepOutcome(step.step_id, StepStatus.WARNED, str(warning), warning.remedy or remedy)
        except Exception as e:
            if step.policy == FailurePolicy.FATAL:
                logger.debug(f"Step {step.step_id}: failed ({e})")
                self.report.record(StepOutcome(step.step_id, StepStatus.FAILED, str(e)))
                self.console.print(f"[red]✗[/red] {step.label.rstrip('.')} failed")
                if step.cleanup_on_failure:
                    self._cleanup(request.project_path)
                if isinstance(e, CreateAppError):
                    raise
                raise StepFailedError(step.step_id, str(e), hint=remedy) from e

            message = f"{step.label.rstrip('.')} failed: {e}"
            self._print_warning(message, remedy)
            logger.debug(f"Step {step.step_id}: warned after failure ({e})")
            return StepOutcome(step.step_id, StepStatus.WARNED, str(e), remedy)

        self.console.print(f"[green]✓[/green] {escape(detail or step.success)}")
        logger.debug(f"Step {step.step_id}: succeeded")
        return StepOutcome(step.step_id, StepStatus.SUCCEEDED, detail or step.success)

    def _print_warning(self, message: str, remedy: Optional[str]) -> None:
        self.console.print(f"[yellow]⚠[/yellow] {escape(message)}")
        if remedy:
            self.console.print(f"  [yellow]→[/yellow] Run manually: [cyan]{escape(remedy)}[/cyan]")

    def _cleanup(self, project_path: Path) -> None:
        if project_path.is_dir():
            logger.debug(f"Removing partially created project at {project_path}")
            shutil.rmtree(project_path, ignore_errors=True)

    # -- Step actions ------------------------------------------------------

    def _verify_requirements(self, request: CreationRequest) -> Optional[str]:
        template = request.template
        checks = self.verifier.checks_for(template)
        if self.verifier.evaluate_all(checks):
            return None

        compiler = next(
            (c for c in checks if c.subject == RequirementSubject.DOMAIN_COMPILER), None
        )
        others_passed = all(c.passed for c in checks if c is not compiler)
        remedies = [c.remedy_hint for c in checks if not c.passed and c.remedy_hint]

        if (
            compiler is not None
            and not compiler.passed
            and not compiler.is_missing
            and template.compiler_version
            and others_passed
        ):
            result = self.reconciler.reconcile(template.compiler_version)
            if result.reconciled:
                return result.message
            raise RequirementsNotMetError(
                result.message,
                hint=f"Run: compact update {template.compiler_version}",
            )

        raise RequirementsNotMetError(
            "Please install missing requirements and try again.",
            hint="; ".join(remedies) or None,
        )

    def _prepare_destination(self, request: CreationRequest) -> Optional[str]:
        path = request.project_path
        if request.overwrite and (path.exists() or path.is_symlink()):
            logger.debug(f"Removing existing {path}")
            if path.is_dir() and not path.is_symlink():
                shutil.rmtree(path)
            else:
                path.unlink()
            return f"Removed existing {path.name}"
        return None

    def _scaffold(self, request: CreationRequest) -> Optional[str]:
        self.scaffold_engine.scaffold_template(
            request.template.name, request.project_path, request.project_name
        )
        return None

    def _clone(self, request: CreationRequest) -> Optional[str]:
        self.git.clone(request.template.repository, request.project_path)
        return f"Cloned {request.template.display_name}"

    def _write_environment(self, request: CreationRequest) -> Optional[str]:
        self.wallet.generate(request.project_path, contract_name=request.template.name)
        return None

    def _strip_contracts(self, request: CreationRequest) -> Optional[str]:
        removed = [
            source for source in request.project_path.rglob("*.compact")
            if "node_modules" not in source.relative_to(request.project_path).parts
        ]
        for source in removed:
            source.unlink()
        if not removed:
            raise StepWarning("No contract sources found to remove")
        return f"Removed {len(removed)} contract source(s); write your own in their place"

    def _install(self, request: CreationRequest) -> Optional[str]:
        self.installer_factory(request.package_manager).install(request.project_path)
        return None

    def _init_git(self, request: CreationRequest) -> Optional[str]:
        if request.template.is_remote:
            self.git.strip_history(request.project_path)
        if not self.git.init_repo(request.project_path):
            raise StepWarning("Git repository initialization skipped")
        return None

    def _probe_container_engine(self, request: CreationRequest) -> Optional[str]:
        engine = self.verifier.check_container_engine()
        if not engine.passed:
            raise StepWarning(f"Docker not available. {engine.remedy_hint}")
        image = self.docker.proof_server_image
        if not self.docker.is_named_image_present(image):
            raise StepWarning("Proof server image not found locally", remedy=f"docker pull {image}")
        return None

    def _compile(self, request: CreationRequest) -> Optional[str]:
        self.installer_factory(request.package_manager).run_script(
            request.project_path, COMPILE_SCRIPT
        )
        return None
