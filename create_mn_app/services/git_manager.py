"""Git operations: initializing generated projects and fetching remote templates."""
import shutil
from pathlib import Path
from typing import Optional

from create_mn_app.core.config import get_config
from create_mn_app.core.errors import CloneError
from create_mn_app.core.logger import get_logger
from create_mn_app.services.process import run_cmd

logger = get_logger(__name__)

INITIAL_COMMIT_MESSAGE = "Initial commit from create-mn-app"


class GitManager:
    """Manages git operations for generated projects."""

    def __init__(self, mock: Optional[bool] = None):
        config = get_config()
        self.mock = config.mock if mock is None else mock
        self.git_host = config.git_host
        self.clone_timeout = config.clone_timeout
        self.command_timeout = config.command_timeout

    def init_repo(self, path: Path) -> bool:
        """Initialize a repository and record an initial commit.

        Args:
            path: Project directory

        Returns:
            True if successful, False otherwise
        """
        if self.mock:
            logger.info(f"MOCK: Would git init {path}")
            return True

        steps = [
            ['git', 'init'],
            ['git', 'add', '-A'],
            ['git', 'commit', '-m', INITIAL_COMMIT_MESSAGE],
        ]
        for cmd in steps:
            rc, _, err = run_cmd(cmd, cwd=path, timeout=self.command_timeout * 6)
            if rc != 0:
                logger.debug(f"Git step failed ({' '.join(cmd)}): {err.strip()}")
                return False

        logger.debug(f"✓ Initialized git repository in {path}")
        return True

    def repository_url(self, repository: str) -> str:
        """Expand an ``owner/name`` reference against the configured host."""
        if repository.startswith(('https://', 'http://', 'git@', 'file://')):
            return repository
        return f"{self.git_host}/{repository}.git"

    def clone(self, repository: str, destination: Path) -> None:
        """Clone a repository without its history.

        The clone's own ``.git`` directory is removed so the generated project
        starts from a clean history.

        Args:
            repository: ``owner/name`` reference or full URL
            destination: Directory to clone into (must not exist or be empty)

        Raises:
            CloneError: If git is missing or the clone fails
        """
        url = self.repository_url(repository)

        if self.mock:
            logger.info(f"MOCK: Would clone {url} to {destination}")
            destination.mkdir(parents=True, exist_ok=True)
            return

        logger.debug(f"Cloning {url} into {destination}")
        rc, _, err = run_cmd(
            ['git', 'clone', '--depth', '1', url, str(destination)],
            timeout=self.clone_timeout,
        )
        if rc != 0:
            raise CloneError(
                f"Failed to clone {url}: {err.strip() or f'exit code {rc}'}",
                hint="Check your internet connection and that git is installed.",
            )

        self.strip_history(destination)

    @staticmethod
    def strip_history(path: Path) -> None:
        """Remove any version-control metadata carried by a checkout."""
        git_dir = path / '.git'
        if git_dir.is_dir():
            shutil.rmtree(git_dir)
        elif git_dir.exists():
            git_dir.unlink()
