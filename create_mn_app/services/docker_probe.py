"""Container engine probe for the local proof server.

Returns graceful fallbacks when docker cannot be inspected; a missing engine
is a result, never an exception.
"""
from typing import Optional

from create_mn_app.core.config import get_config
from create_mn_app.services.process import run_cmd


class DockerProbe:
    """Checks for a usable docker engine and the proof server image."""

    def __init__(self, mock: Optional[bool] = None):
        config = get_config()
        self.mock = config.mock if mock is None else mock
        self.timeout = config.command_timeout
        self.proof_server_image = config.proof_server_image

    def engine_version(self) -> Optional[str]:
        if self.mock:
            return "Docker version 27.0.0 (mock)"
        rc, out, _ = run_cmd(['docker', '--version'], timeout=self.timeout)
        if rc != 0:
            return None
        return out.strip() or None

    def is_named_image_present(self, image_name: str) -> bool:
        """Check whether ``docker images <name>`` lists the image."""
        if self.mock:
            return True
        rc, out, _ = run_cmd(['docker', 'images', image_name], timeout=self.timeout)
        return rc == 0 and image_name in out
