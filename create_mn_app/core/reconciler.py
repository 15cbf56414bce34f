"""Compiler version reconciliation.

When a template pins a Compact version and a different compiler is installed,
offer to switch to the pinned version and check once more. There is exactly
one update attempt and one recheck per run.
"""
from dataclasses import dataclass
from typing import Optional

from create_mn_app.core.errors import CommandError
from create_mn_app.core.logger import get_logger
from create_mn_app.core.requirements import RequirementVerifier
from create_mn_app.models.outcome import RequirementCheck
from create_mn_app.prompts import Prompter
from create_mn_app.services.compact import CompactToolchain

logger = get_logger(__name__)


@dataclass
class ReconciliationResult:
    """Outcome of one reconciliation attempt."""

    reconciled: bool
    message: str
    update_attempted: bool = False
    installed_version: Optional[str] = None
    recheck: Optional[RequirementCheck] = None


class VersionReconciler:
    """Drives the update-and-recheck flow for a compiler version mismatch."""

    def __init__(
        self,
        verifier: RequirementVerifier,
        toolchain: Optional[CompactToolchain] = None,
        prompter: Optional[Prompter] = None,
    ):
        self.verifier = verifier
        self.toolchain = toolchain or verifier.compact
        self.prompter = prompter

    def reconcile(self, required_version: str) -> ReconciliationResult:
        """Try to bring the installed compiler to ``required_version``.

        Args:
            required_version: Version pinned by the template

        Returns:
            ReconciliationResult; ``reconciled`` is True only if the recheck passed
        """
        installed = self.toolchain.installed_version()

        if installed is None:
            return ReconciliationResult(
                reconciled=False,
                message="Compact is not installed. Please install it manually and try again.",
            )

        if not self.toolchain.needs_update(installed, required_version):
            return ReconciliationResult(
                reconciled=False,
                installed_version=installed,
                message=f"Compact {installed} is installed but the check failed. "
                        "Please verify your installation manually.",
            )

        logger.debug(f"Compact version mismatch: installed {installed}, required {required_version}")

        if self.prompter is not None and not self.prompter.ask_confirm(
            f"Compact {installed} is installed but this template needs {required_version}. "
            "Update now?",
            default=True,
        ):
            return ReconciliationResult(
                reconciled=False,
                installed_version=installed,
                message=f"Please update Compact manually: compact update {required_version}",
            )

        try:
            self.toolchain.update(required_version)
        except CommandError as e:
            logger.debug(f"Compact update failed: {e}")
            return ReconciliationResult(
                reconciled=False,
                update_attempted=True,
                installed_version=installed,
                message=f"Compact update failed ({e}). "
                        f"Please update manually: compact update {required_version}",
            )

        recheck = self.verifier.check_domain_compiler(required_version)
        self.verifier.evaluate_all([recheck])
        if not recheck.passed:
            return ReconciliationResult(
                reconciled=False,
                update_attempted=True,
                installed_version=installed,
                recheck=recheck,
                message="Requirements still not met after update. Please check manually.",
            )

        return ReconciliationResult(
            reconciled=True,
            update_attempted=True,
            installed_version=installed,
            recheck=recheck,
            message=f"Compact updated from {installed} to {recheck.observed_version}",
        )
