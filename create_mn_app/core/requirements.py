"""Prerequisite checks for templates that build against external toolchains.

Each check probes one tool and returns a RequirementCheck. A tool that cannot
be invoked is a failed check, never an exception.
"""
import re
from typing import Iterable, List, Optional

from packaging.version import InvalidVersion, Version
from rich.console import Console
from rich.markup import escape

from create_mn_app.core.config import get_config
from create_mn_app.core.logger import console as default_console
from create_mn_app.core.logger import get_logger
from create_mn_app.models.outcome import RequirementCheck, RequirementSubject
from create_mn_app.models.template import TemplateDescriptor
from create_mn_app.services.compact import INSTALL_URL, CompactToolchain, version_satisfies
from create_mn_app.services.docker_probe import DockerProbe
from create_mn_app.services.process import run_cmd

logger = get_logger(__name__)

NODE_DOWNLOAD_URL = "https://nodejs.org/"
DOCKER_DOWNLOAD_URL = "https://docs.docker.com/get-docker/"


def read_node_version(mock: Optional[bool] = None) -> Optional[str]:
    """Version of the Node.js runtime the generated project will run on."""
    config = get_config()
    if config.mock if mock is None else mock:
        return "22.0.0"
    rc, out, _ = run_cmd(['node', '--version'], timeout=config.command_timeout)
    if rc != 0:
        return None
    match = re.search(r'(\d+(?:\.\d+){0,2})', out)
    return match.group(1) if match else None


def _at_least(observed: str, minimum: str) -> bool:
    try:
        return Version(observed) >= Version(minimum)
    except InvalidVersion:
        return False


class RequirementVerifier:
    """Runs independent prerequisite checks and reports each outcome."""

    def __init__(
        self,
        docker: Optional[DockerProbe] = None,
        compact: Optional[CompactToolchain] = None,
        node_version_reader=read_node_version,
        console: Optional[Console] = None,
    ):
        self.docker = docker or DockerProbe()
        self.compact = compact or CompactToolchain()
        self.read_node_version = node_version_reader
        self.console = console or default_console

    def check_runtime_version(self, minimum: str) -> RequirementCheck:
        """Node.js must be at least ``minimum`` (e.g. ``22`` means >=22.0.0)."""
        observed = self.read_node_version()
        passed = observed is not None and _at_least(observed, minimum)
        if observed is None:
            hint = f"Install Node.js {minimum}+ from {NODE_DOWNLOAD_URL}"
        else:
            hint = f"Upgrade Node.js from {observed} to {minimum}+ ({NODE_DOWNLOAD_URL})"
        return RequirementCheck(
            subject=RequirementSubject.RUNTIME,
            name="Node.js",
            passed=passed,
            observed_version=observed,
            required_version=f">={minimum}",
            remedy_hint="" if passed else hint,
        )

    def check_container_engine(self) -> RequirementCheck:
        version = self.docker.engine_version()
        return RequirementCheck(
            subject=RequirementSubject.CONTAINER_ENGINE,
            name="Docker",
            passed=version is not None,
            observed_version=version,
            remedy_hint="" if version else
            f"Install Docker to run the proof server: {DOCKER_DOWNLOAD_URL}",
        )

    def check_domain_compiler(self, required_version: Optional[str] = None) -> RequirementCheck:
        """The Compact compiler must be installed, and compatible if a version is pinned."""
        observed = self.compact.installed_version()
        if observed is None:
            return RequirementCheck(
                subject=RequirementSubject.DOMAIN_COMPILER,
                name="Compact compiler",
                passed=False,
                required_version=required_version,
                remedy_hint=f"Install the Compact developer tools: {INSTALL_URL}",
            )

        passed = required_version is None or version_satisfies(observed, required_version)
        return RequirementCheck(
            subject=RequirementSubject.DOMAIN_COMPILER,
            name="Compact compiler",
            passed=passed,
            observed_version=observed,
            required_version=required_version,
            remedy_hint="" if passed else f"Run: compact update {required_version}",
        )

    def checks_for(self, template: TemplateDescriptor) -> List[RequirementCheck]:
        """Blocking checks a template declares."""
        checks = []
        if template.minimum_runtime_version:
            checks.append(self.check_runtime_version(template.minimum_runtime_version))
        if template.requires_compiler:
            checks.append(self.check_domain_compiler(template.compiler_version))
        return checks

    def evaluate_all(self, checks: Iterable[RequirementCheck]) -> bool:
        """Print each check as it is evaluated; True only if all passed."""
        all_passed = True
        for check in checks:
            self.present(check)
            all_passed = all_passed and check.passed
        return all_passed

    def present(self, check: RequirementCheck) -> None:
        logger.debug(f"Requirement {check.subject.value}: passed={check.passed} "
                     f"observed={check.observed_version} required={check.required_version}")
        version = f" {check.observed_version}" if check.observed_version else ""
        if check.passed:
            self.console.print(f"[green]✓[/green] {escape(check.name + version)}")
            return

        if check.observed_version and check.required_version:
            status = f"found {check.observed_version}, need {check.required_version}"
        else:
            status = "not found"
        self.console.print(f"[red]✗[/red] {escape(check.name)} [dim]({escape(status)})[/dim]")
        if check.remedy_hint:
            self.console.print(f"  [yellow]→[/yellow] {escape(check.remedy_hint)}")
