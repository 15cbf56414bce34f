#!/usr/bin/env python3
"""create-mn-app CLI - Create Midnight Network applications."""
import sys
from typing import Optional

import typer
from packaging.version import Version
from rich.markup import escape

from create_mn_app import __version__
from create_mn_app.cli_support import (
    handle_cli_error,
    print_error,
    print_info,
    print_templates,
)
from create_mn_app.core.config import get_config
from create_mn_app.core.errors import (
    OperationCancelled,
    RuntimeVersionError,
    TemplateNotFoundError,
    TemplateUnavailableError,
)
from create_mn_app.core.logger import console, enable_debug, get_logger
from create_mn_app.core.orchestrator import CreationOrchestrator
from create_mn_app.core.registry import get_registry
from create_mn_app.core.request import DEFAULT_TEMPLATE, CreateOptions, RequestResolver
from create_mn_app.prompts import TyperPrompter
from create_mn_app.setup_guide import (
    print_bundled_success,
    print_post_clone,
    print_remote_instructions,
    print_report,
)

app = typer.Typer(
    name="create-mn-app",
    help="""Create Midnight Network applications

Quick start:
  create-mn-app my-app                        # Pick a template interactively
  create-mn-app my-app --template hello-world # Bundled starter
  create-mn-app my-app --template counter     # Clone the counter example
""",
    add_completion=False,
)

logger = get_logger(__name__)


def check_python_version(minimum: str) -> None:
    """Refuse to run on an interpreter older than ``minimum``.

    Raises:
        RuntimeVersionError: If the running interpreter is too old
    """
    current = ".".join(str(part) for part in sys.version_info[:3])
    if Version(current) < Version(minimum):
        raise RuntimeVersionError(
            f"Python {minimum} or higher is required (found {current}).",
            hint="Install a newer Python from https://www.python.org/downloads/",
        )


def _version_callback(value: bool) -> None:
    if value:
        console.print(__version__)
        raise typer.Exit()


@app.command()
def create(
    project_directory: Optional[str] = typer.Argument(
        None, help="Directory to create the project in"
    ),
    template: Optional[str] = typer.Option(
        None, "--template", "-t", help="Template to use (hello-world, counter, ...)"
    ),
    use_npm: bool = typer.Option(False, "--use-npm", help="Use npm as the package manager"),
    use_yarn: bool = typer.Option(False, "--use-yarn", help="Use yarn as the package manager"),
    use_pnpm: bool = typer.Option(False, "--use-pnpm", help="Use pnpm as the package manager"),
    use_bun: bool = typer.Option(False, "--use-bun", help="Use bun as the package manager"),
    skip_install: bool = typer.Option(False, "--skip-install", help="Skip installing dependencies"),
    skip_git: bool = typer.Option(False, "--skip-git", help="Skip git repository initialization"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show detailed output"),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True,
        help="Show the version and exit",
    ),
):
    """Create a new Midnight app in PROJECT_DIRECTORY."""
    options = CreateOptions(
        template=template,
        use_npm=use_npm,
        use_yarn=use_yarn,
        use_pnpm=use_pnpm,
        use_bun=use_bun,
        skip_install=skip_install,
        skip_git=skip_git,
        verbose=verbose,
    )

    try:
        if verbose:
            enable_debug()
        check_python_version(get_config().min_python)

        if options.template is None and not sys.stdin.isatty():
            logger.debug(f"No terminal to prompt on; using template {DEFAULT_TEMPLATE}")
            options.template = DEFAULT_TEMPLATE

        prompter = TyperPrompter(console)
        request = RequestResolver(prompter).resolve(project_directory, options)
        print_info(console, f"package manager: [cyan]{request.package_manager}[/cyan]\n", prefix="i")

        orchestrator = CreationOrchestrator(prompter=prompter, console=console)
        report = orchestrator.run(request)
        print_report(console, report)

        if request.template.is_remote:
            print_post_clone(console, request.template)
            print_remote_instructions(console, request)
        else:
            print_bundled_success(console, request)

    except OperationCancelled:
        console.print("\n[yellow]✖ Operation cancelled.[/yellow]")
        raise typer.Exit(0)
    except (TemplateNotFoundError, TemplateUnavailableError) as e:
        print_error(console, escape(e.message), prefix="\n✖")
        if e.hint:
            console.print(f"\n[yellow]💡 {escape(e.hint)}[/yellow]")
        print_templates(console, get_registry().list())
        raise typer.Exit(1)
    except Exception as e:
        handle_cli_error(e, console, verbose=verbose)


if __name__ == "__main__":
    app()
