"""Compact compiler toolchain: version detection and updates."""
import re
from typing import Optional

from packaging.version import InvalidVersion, Version

from create_mn_app.core.config import get_config
from create_mn_app.core.logger import get_logger
from create_mn_app.services.process import run_checked, run_cmd

logger = get_logger(__name__)

VERSION_PATTERN = re.compile(r'(\d+\.\d+\.\d+)')

INSTALL_URL = "https://docs.midnight.network/getting-started/installation"


def parse_version(value: Optional[str]) -> Optional[Version]:
    if not value:
        return None
    try:
        return Version(value)
    except InvalidVersion:
        return None


def version_satisfies(installed: Optional[str], required: str) -> bool:
    """True when ``installed`` is compatible with ``required``.

    Compact releases below 1.0 break compatibility on minor bumps, so the
    installed compiler must share major.minor and be at least as new.
    """
    have = parse_version(installed)
    want = parse_version(required)
    if have is None or want is None:
        return False
    return have.release[:2] == want.release[:2] and have >= want


class CompactToolchain:
    """Wraps the ``compact`` developer tool."""

    MOCK_VERSION = "0.23.0"

    def __init__(self, mock: Optional[bool] = None):
        config = get_config()
        self.mock = config.mock if mock is None else mock
        self.timeout = config.command_timeout
        self.update_timeout = config.update_timeout

    def installed_version(self) -> Optional[str]:
        """Return the active compiler version, or None if not installed."""
        if self.mock:
            return self.MOCK_VERSION
        rc, out, _ = run_cmd(['compact', 'compile', '--version'], timeout=self.timeout)
        if rc != 0:
            return None
        match = VERSION_PATTERN.search(out)
        return match.group(1) if match else None

    def needs_update(self, installed: Optional[str], required: str) -> bool:
        """A mismatch is only actionable when some compiler is installed."""
        return installed is not None and not version_satisfies(installed, required)

    def update(self, version: str) -> None:
        """Switch the active compiler to ``version``.

        Raises:
            CommandError: If the update command fails or compact is missing
        """
        if self.mock:
            logger.info(f"MOCK: Would run 'compact update {version}'")
            return
        logger.debug(f"Updating Compact compiler to {version}")
        run_checked(['compact', 'update', version], timeout=self.update_timeout)
