"""Package manager abstraction: npm, yarn, pnpm and bun."""
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

from create_mn_app.core.config import get_config
from create_mn_app.core.logger import get_logger
from create_mn_app.models.request import PackageManagerName
from create_mn_app.services.process import run_checked

logger = get_logger(__name__)


@dataclass(frozen=True)
class PackageManagerInfo:
    name: str
    install_command: str
    run_command: str

    def script_command(self, script: str) -> str:
        return f"{self.run_command} {script}"


PACKAGE_MANAGER_INFO: Dict[str, PackageManagerInfo] = {
    'npm': PackageManagerInfo('npm', 'npm install', 'npm run'),
    'yarn': PackageManagerInfo('yarn', 'yarn', 'yarn'),
    'pnpm': PackageManagerInfo('pnpm', 'pnpm install', 'pnpm'),
    'bun': PackageManagerInfo('bun', 'bun install', 'bun run'),
}


def detect_package_manager(user_agent: Optional[str] = None) -> PackageManagerName:
    """Guess the package manager that launched us.

    npx, yarn create, pnpm create and bunx all set ``npm_config_user_agent``
    (e.g. ``pnpm/9.1.0 npm/? node/v22.3.0 linux x64``).
    """
    agent = user_agent if user_agent is not None else os.environ.get('npm_config_user_agent', '')
    for candidate in ('yarn', 'pnpm', 'bun'):
        if agent.startswith(candidate):
            return candidate
    return 'npm'


def get_package_manager_info(name: str) -> PackageManagerInfo:
    return PACKAGE_MANAGER_INFO[name]


class PackageInstaller:
    """Runs installs and package scripts with the selected manager."""

    def __init__(self, package_manager: str, mock: Optional[bool] = None):
        config = get_config()
        self.info = get_package_manager_info(package_manager)
        self.mock = config.mock if mock is None else mock
        self.timeout = config.install_timeout

    def _install_args(self) -> List[str]:
        return self.info.install_command.split()

    def _script_args(self, script: str) -> List[str]:
        return self.info.script_command(script).split()

    def install(self, project_path: Path) -> None:
        """Install dependencies in the project.

        Raises:
            CommandError: If the install exits non-zero or the manager is missing
        """
        if self.mock:
            logger.info(f"MOCK: Would run '{self.info.install_command}' in {project_path}")
            return
        run_checked(self._install_args(), cwd=project_path, timeout=self.timeout)

    def run_script(self, project_path: Path, script: str) -> None:
        """Run a package.json script.

        Raises:
            CommandError: If the script exits non-zero
        """
        if self.mock:
            logger.info(f"MOCK: Would run '{self.info.script_command(script)}' in {project_path}")
            return
        run_checked(self._script_args(script), cwd=project_path, timeout=self.timeout)
