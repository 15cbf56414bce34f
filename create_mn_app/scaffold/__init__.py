"""Bundled template scaffolding.

Materializes template trees shipped under ``create_mn_app/templates/`` into a
new project directory, rendering ``*.template`` files with Jinja2.
"""

from .core import ScaffoldEngine
from .templates import TemplateEngine, build_template_variables

__all__ = [
    "ScaffoldEngine",
    "TemplateEngine",
    "build_template_variables",
]
