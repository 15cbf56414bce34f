"""Template variable substitution for scaffolded files."""
import re
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from jinja2 import BaseLoader, Environment, StrictUndefined, TemplateError

from create_mn_app.core.errors import ScaffoldError


def build_template_variables(project_name: str, now: Optional[datetime] = None) -> Dict[str, Any]:
    """Variables available to every ``*.template`` file.

    Args:
        project_name: Validated project name

    Returns:
        Mapping of variable name to value
    """
    now = now or datetime.now(timezone.utc)
    return {
        "project_name": project_name,
        "capitalized_name": project_name[:1].upper() + project_name[1:],
        "kebab_name": re.sub(r"\s+", "-", project_name.lower()),
        "timestamp": now.isoformat(),
        "year": now.year,
    }


class TemplateEngine:
    """Renders template file contents with Jinja2."""

    def __init__(self):
        self.jinja_env = Environment(
            loader=BaseLoader(),
            autoescape=False,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )

    def render(self, content: str, context: Dict[str, Any], source: str = "<template>") -> str:
        """Render a template string with given context.

        Raises:
            ScaffoldError: If the template is malformed or references an
                unknown variable
        """
        try:
            return self.jinja_env.from_string(content).render(**context)
        except TemplateError as e:
            raise ScaffoldError(f"Failed to render {source}: {e}") from e
