"""What to show the operator once a project has been created."""
from typing import List, Tuple

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from create_mn_app.models.outcome import CreationReport, StepStatus
from create_mn_app.models.request import CreationRequest
from create_mn_app.models.template import TemplateDescriptor
from create_mn_app.services.package_manager import PackageManagerInfo, get_package_manager_info

FAUCET_URL = "https://faucet.preprod.midnight.network/"
DOCS_URL = "https://docs.midnight.network"
PROOF_SERVER_RUN = "docker run -d -p 6300:6300 -e PORT=6300 midnightntwrk/proof-server:7.0.0"

# Run-scripts shipped by the bundled template
BUNDLED_SCRIPTS: List[Tuple[str, str]] = [
    ("setup", "Compile contract and deploy"),
    ("cli", "Interactive CLI to test your contract"),
    ("check-balance", "Check your wallet balance"),
    ("proof-server:start", "Start the proof server (Docker)"),
    ("compile", "Compile Compact contracts"),
]

STATUS_STYLE = {
    StepStatus.SUCCEEDED: "[green]✓ ok[/green]",
    StepStatus.WARNED: "[yellow]⚠ warning[/yellow]",
    StepStatus.FAILED: "[red]✗ failed[/red]",
}

RULE = "━" * 60


def _command(console: Console, command: str) -> None:
    console.print(f"    [dim]$[/dim] [cyan]{escape(command)}[/cyan]")


def print_report(console: Console, report: CreationReport) -> None:
    """Render the per-step outcomes as a table."""
    table = Table(title="Creation steps", show_header=True, header_style="bold cyan")
    table.add_column("Step", style="cyan")
    table.add_column("Status")
    table.add_column("Details", style="dim")

    for outcome in report.outcomes:
        details = outcome.detail
        if outcome.remedy:
            details = f"{details} (run: {outcome.remedy})"
        table.add_row(outcome.step_id, STATUS_STYLE[outcome.status], escape(details))

    console.print()
    console.print(table)


def print_bundled_success(console: Console, request: CreationRequest) -> None:
    """Success banner with the run-scripts of the bundled template."""
    pm = get_package_manager_info(request.package_manager)

    console.print()
    console.print(f"[bold green]{RULE}[/bold green]")
    console.print("[bold green]🎉 Success! Your Midnight app is ready.[/bold green]")
    console.print(f"[bold green]{RULE}[/bold green]")
    console.print()
    console.print("[bold]📂 Project created at:[/bold]")
    console.print(f"   [cyan]{escape(request.project_name)}[/cyan]")
    console.print()
    console.print("[bold]🚀 Next Steps:[/bold]")
    console.print()
    console.print("[yellow]  1.[/yellow] Navigate to your project:")
    console.print(f"     [cyan]cd {escape(request.project_name)}[/cyan]")
    if request.skip_install:
        console.print()
        console.print("[yellow]  2.[/yellow] Install dependencies:")
        console.print(f"     [cyan]{pm.install_command}[/cyan]")
    console.print()
    step = 3 if request.skip_install else 2
    console.print(f"[yellow]  {step}.[/yellow] Setup and deploy your contract:")
    console.print(f"     [cyan]{pm.script_command('setup')}[/cyan]")
    console.print()
    console.print("[bold]📚 Available Commands:[/bold]")
    console.print()
    for script, description in BUNDLED_SCRIPTS:
        console.print(f"  [cyan]{pm.script_command(script)}[/cyan]")
        console.print(f"    [dim]{description}[/dim]")
        console.print()
    console.print(f"[bold green]{RULE}[/bold green]")
    console.print()
    console.print("[magenta]💡 Tips:[/magenta]")
    console.print("[dim]   • Make sure Docker is running for the proof server[/dim]")
    console.print("[dim]   • Your wallet seed is stored in .env; keep it secret[/dim]")
    console.print(f"[dim]   • Visit {DOCS_URL} for documentation[/dim]")
    console.print()
    console.print("Happy coding! [yellow]🌙✨[/yellow]")


def print_post_clone(console: Console, template: TemplateDescriptor) -> None:
    console.print("\n[bold][[green]✓[/green]] Clone Complete[/bold]\n")
    if template.requires_compiler:
        console.print("[dim]    compact compiler required[/dim]")
        console.print("[dim]    follow setup instructions below[/dim]")
        console.print()


def _print_counter_steps(console: Console, request: CreationRequest, pm: PackageManagerInfo) -> None:
    console.print("[dim]    project structure:[/dim]")
    console.print("[dim]    ├─ contract/     smart contract (compact)[/dim]")
    console.print("[dim]    └─ counter-cli/  cli interface[/dim]")
    console.print()
    _command(console, f"cd {request.project_name}")
    _command(console, pm.install_command)
    _command(console, f"cd contract && {pm.script_command('compact')}")
    console.print("[dim]      (downloads ~500MB zk parameters on first run)[/dim]")
    _command(console, pm.script_command("build"))
    _command(console, f"cd ../counter-cli && {pm.script_command('build')}")
    console.print()


def _print_student_steps(console: Console, request: CreationRequest, pm: PackageManagerInfo) -> None:
    console.print("[dim]    the contract sources have been removed:[/dim]")
    console.print("[dim]    write your own contract under contract/src/ before compiling[/dim]")
    console.print()
    _command(console, f"cd {request.project_name}")
    _command(console, pm.install_command)
    console.print("[dim]      (add your .compact contract now)[/dim]")
    _command(console, f"cd contract && {pm.script_command('compact')}")
    _command(console, pm.script_command("build"))
    _command(console, f"cd ../counter-cli && {pm.script_command('build')}")
    console.print()


REMOTE_STEPS = {
    "counter": _print_counter_steps,
    "student": _print_student_steps,
}


def print_remote_instructions(console: Console, request: CreationRequest) -> None:
    """Next steps for a cloned template (build, proof server, run)."""
    template = request.template
    if not template.is_remote:
        return

    pm = get_package_manager_info(request.package_manager)
    console.print("\n[bold][[blue]→[/blue]] Next Steps[/bold]\n")

    printer = REMOTE_STEPS.get(template.name)
    if printer is None:
        _command(console, f"cd {request.project_name}")
        _command(console, pm.install_command)
        console.print("[dim]    see README.md for build instructions[/dim]")
        console.print()
        return
    printer(console, request, pm)

    console.print("[bold][[magenta]i[/magenta]] Proof Server[/bold]\n")
    _command(console, PROOF_SERVER_RUN)
    console.print("[dim]      (runs in background)[/dim]")
    console.print()
    console.print("[bold][[green]▶[/green]] Run Application[/bold]\n")
    _command(console, f"cd counter-cli && {pm.script_command('start')}")
    console.print()
    console.print("[bold][[yellow]![/yellow]] Important[/bold]\n")
    console.print("[dim]    • create wallet and fund from faucet[/dim]")
    console.print(f"[dim]    • Preprod faucet: {FAUCET_URL}[/dim]")
    console.print("[dim]    • funding takes 2-3 minutes[/dim]")
    console.print("[dim]    • see README.md for detailed guide[/dim]")
    console.print()
