"""Tests for compiler version reconciliation."""
from conftest import CannedPrompter, FakeCompact, make_verifier

from create_mn_app.core.reconciler import VersionReconciler


def build(console, compact, prompter=None):
    verifier = make_verifier(console, compact=compact)
    return VersionReconciler(verifier, prompter=prompter)


class TestVersionReconciler:
    """Test the single update-and-recheck cycle."""

    def test_update_then_recheck_succeeds(self, quiet_console):
        """Installed 0.20.0, update brings 0.23.0: reconciled."""
        compact = FakeCompact("0.20.0", after_update="0.23.0")
        result = build(quiet_console, compact).reconcile("0.23.0")

        assert result.reconciled
        assert result.update_attempted
        assert result.installed_version == "0.20.0"
        assert result.recheck.observed_version == "0.23.0"
        assert compact.updates == ["0.23.0"]

    def test_recheck_failure_does_not_retry(self, quiet_console):
        compact = FakeCompact("0.20.0", after_update="0.20.0")
        result = build(quiet_console, compact).reconcile("0.23.0")

        assert not result.reconciled
        assert result.message == "Requirements still not met after update. Please check manually."
        assert compact.updates == ["0.23.0"]

    def test_update_failure(self, quiet_console):
        compact = FakeCompact("0.20.0", update_error=True)
        result = build(quiet_console, compact).reconcile("0.23.0")

        assert not result.reconciled
        assert result.update_attempted
        assert "compact update 0.23.0" in result.message
        assert result.recheck is None

    def test_not_installed_skips_update(self, quiet_console):
        compact = FakeCompact(None)
        result = build(quiet_console, compact).reconcile("0.23.0")

        assert not result.reconciled
        assert not result.update_attempted
        assert "install it manually" in result.message
        assert compact.updates == []

    def test_already_satisfied_skips_update(self, quiet_console):
        compact = FakeCompact("0.23.0")
        result = build(quiet_console, compact).reconcile("0.23.0")

        assert not result.reconciled
        assert not result.update_attempted
        assert compact.updates == []

    def test_operator_declines_update(self, quiet_console):
        compact = FakeCompact("0.20.0", after_update="0.23.0")
        prompter = CannedPrompter(confirms=[False])
        result = build(quiet_console, compact, prompter).reconcile("0.23.0")

        assert not result.reconciled
        assert compact.updates == []
        assert "Update now?" in prompter.asked[0]

    def test_operator_accepts_update(self, quiet_console):
        compact = FakeCompact("0.20.0", after_update="0.23.1")
        prompter = CannedPrompter(confirms=[True])
        result = build(quiet_console, compact, prompter).reconcile("0.23.0")

        assert result.reconciled
        assert "0.20.0" in result.message and "0.23.1" in result.message
