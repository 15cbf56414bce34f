"""Tests for the post-creation output."""
from create_mn_app.models.outcome import CreationReport, StepOutcome, StepStatus
from create_mn_app.setup_guide import print_bundled_success, print_report


class TestPrintReport:
    """Test the step-outcome table."""

    def test_rows_and_remedy(self, quiet_console):
        report = CreationReport(project_path="/tmp/demo", template="hello-world")
        report.record(StepOutcome("scaffold", StepStatus.SUCCEEDED, "Project structure created"))
        report.record(StepOutcome("install", StepStatus.WARNED, "npm install failed", "npm install"))

        print_report(quiet_console, report)

        output = quiet_console.file.getvalue()
        assert "Creation steps" in output
        assert "Project structure created" in output
        assert "(run: npm install)" in output

    def test_bracketed_detail_is_printed_verbatim(self, quiet_console):
        report = CreationReport(project_path="/tmp/demo", template="hello-world")
        report.record(StepOutcome(
            "install", StepStatus.WARNED, "npm ERR! enoent [/root/.npm/_cacache]", "npm install",
        ))

        print_report(quiet_console, report)

        assert "[/root/.npm/_cacache]" in quiet_console.file.getvalue()


class TestBundledSuccess:
    """Test the success banner."""

    def test_commands_follow_package_manager(self, quiet_console, make_request):
        print_bundled_success(quiet_console, make_request(package_manager="bun", skip_install=True))

        output = quiet_console.file.getvalue()
        assert "bun install" in output
        assert "bun run setup" in output
        assert "npm" not in output
