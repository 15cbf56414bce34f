"""Core scaffolding: materializes a bundled template tree on disk."""
import shutil
from pathlib import Path
from typing import Any, Dict, Optional

from create_mn_app.core.errors import ScaffoldError, TemplateRootNotFoundError
from create_mn_app.core.logger import get_logger
from create_mn_app.scaffold.templates import TemplateEngine, build_template_variables

logger = get_logger(__name__)

TEMPLATES_DIR = Path(__file__).parent.parent / "templates"

# Files whose name ends with the marker are rendered, then written without it
TEMPLATE_MARKER = ".template"

# Dotfiles can't ship reliably inside a package, so they carry escaped names
ESCAPED_NAMES = {
    "_gitignore": ".gitignore",
}


def destination_name(source_name: str) -> str:
    """Map a template entry name to the name written in the project."""
    name = source_name
    if name.endswith(TEMPLATE_MARKER) and len(name) > len(TEMPLATE_MARKER):
        name = name[: -len(TEMPLATE_MARKER)]
    return ESCAPED_NAMES.get(name, name)


class ScaffoldEngine:
    """Mirrors a template directory into a project directory."""

    def __init__(self, templates_dir: Optional[Path] = None):
        self.templates_dir = templates_dir or TEMPLATES_DIR
        self.engine = TemplateEngine()

    def template_root(self, template_name: str) -> Path:
        return self.templates_dir / template_name

    def scaffold_template(self, template_name: str, destination_root: Path, project_name: str) -> None:
        """Scaffold a bundled template by name.

        Args:
            template_name: Directory name under the bundled templates dir
            destination_root: Project directory to populate
            project_name: Validated project name used for substitution
        """
        self.scaffold(
            self.template_root(template_name),
            destination_root,
            build_template_variables(project_name),
        )

    def scaffold(self, template_root: Path, destination_root: Path, variables: Dict[str, Any]) -> None:
        """Depth-first copy of ``template_root`` into ``destination_root``.

        The template root is checked before anything is created, so a missing
        template never leaves a destination behind. Any later failure leaves
        partial output; cleanup is the caller's job.

        Raises:
            TemplateRootNotFoundError: If template_root doesn't exist
            ScaffoldError: If a file can't be rendered or written
        """
        template_root = Path(template_root)
        if not template_root.is_dir():
            raise TemplateRootNotFoundError(template_root)

        logger.debug(f"Scaffolding {template_root} -> {destination_root}")
        try:
            destination_root.mkdir(parents=True, exist_ok=True)
            self._copy_tree(template_root, destination_root, variables)
        except OSError as e:
            raise ScaffoldError(
                f"Failed to write project files: {e}",
                hint="Check that you have write permission and free disk space.",
            ) from e

    def _copy_tree(self, source_dir: Path, dest_dir: Path, variables: Dict[str, Any]) -> None:
        for entry in sorted(source_dir.iterdir()):
            if entry.is_dir():
                target = dest_dir / ESCAPED_NAMES.get(entry.name, entry.name)
                target.mkdir(exist_ok=True)
                self._copy_tree(entry, target, variables)
                continue

            target = dest_dir / destination_name(entry.name)
            if entry.name.endswith(TEMPLATE_MARKER):
                rendered = self.engine.render(
                    entry.read_text(encoding="utf-8"), variables, source=str(entry)
                )
                target.write_text(rendered, encoding="utf-8")
                shutil.copymode(entry, target)
            else:
                shutil.copy2(entry, target)
