"""Template registry: the static starter template catalog."""
from functools import lru_cache
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

import yaml

from create_mn_app.core.logger import get_logger
from create_mn_app.models.template import TemplateDescriptor

logger = get_logger(__name__)

CATALOG_FILE = Path(__file__).parent.parent / "templates" / "catalog.yml"

# Maximum edit distance for a "did you mean" suggestion
SUGGESTION_THRESHOLD = 3


def edit_distance(a: str, b: str) -> int:
    """Levenshtein distance between two strings (single-row DP)."""
    if len(a) < len(b):
        a, b = b, a
    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        current = [i]
        for j, cb in enumerate(b, start=1):
            current.append(min(
                previous[j] + 1,             # deletion
                current[j - 1] + 1,          # insertion
                previous[j - 1] + (ca != cb),  # substitution
            ))
        previous = current
    return previous[-1]


class TemplateRegistry:
    """Read-only catalog of template descriptors.

    Catalog order is preserved; it drives the selection prompt and breaks
    ties between equally close suggestions.
    """

    def __init__(self, templates: Iterable[TemplateDescriptor]):
        self._templates: Tuple[TemplateDescriptor, ...] = tuple(templates)
        names = [t.name for t in self._templates]
        duplicates = {n for n in names if names.count(n) > 1}
        if duplicates:
            raise ValueError(f"Duplicate template names in catalog: {sorted(duplicates)}")

    @classmethod
    def from_yaml(cls, catalog_file: Path) -> "TemplateRegistry":
        """Load a registry from a catalog YAML file.

        Raises:
            FileNotFoundError: If the catalog file doesn't exist
            ValueError: If the catalog is malformed
        """
        with open(catalog_file) as f:
            data = yaml.safe_load(f) or {}

        entries = data.get('templates')
        if not isinstance(entries, list):
            raise ValueError(f"Catalog {catalog_file} must contain a 'templates' list")

        logger.debug(f"Loaded {len(entries)} templates from {catalog_file}")
        return cls(TemplateDescriptor.model_validate(entry) for entry in entries)

    def list(self, include_unavailable: bool = False) -> List[TemplateDescriptor]:
        """List templates in catalog order."""
        if include_unavailable:
            return list(self._templates)
        return [t for t in self._templates if t.is_available]

    def lookup(self, name: str) -> Optional[TemplateDescriptor]:
        for template in self._templates:
            if template.name == name:
                return template
        return None

    def is_selectable(self, name: str) -> bool:
        template = self.lookup(name)
        return template is not None and template.is_available

    def suggest(self, input_name: str) -> Optional[TemplateDescriptor]:
        """Closest selectable template within the suggestion threshold.

        Args:
            input_name: Name as typed by the user

        Returns:
            The first selectable template with minimal edit distance, or None
            if that distance exceeds SUGGESTION_THRESHOLD
        """
        needle = input_name.lower()
        best: Optional[TemplateDescriptor] = None
        best_distance = None

        for template in self.list():
            distance = edit_distance(needle, template.name.lower())
            # Strict comparison keeps the catalog-first template on ties
            if best_distance is None or distance < best_distance:
                best, best_distance = template, distance

        if best is None or best_distance > SUGGESTION_THRESHOLD:
            return None
        return best


@lru_cache(maxsize=1)
def get_registry() -> TemplateRegistry:
    """Process-wide registry, loaded once from the embedded catalog."""
    return TemplateRegistry.from_yaml(CATALOG_FILE)
