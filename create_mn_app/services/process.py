"""Thin sub-process helpers shared by the collaborators."""
import subprocess
from pathlib import Path
from typing import List, Optional, Tuple, Union

from create_mn_app.core.errors import CommandError
from create_mn_app.core.logger import get_logger

logger = get_logger(__name__)

# Exit codes reported when the process never ran
COMMAND_NOT_FOUND = 127
COMMAND_TIMED_OUT = 124


def run_cmd(
    cmd: List[str],
    cwd: Optional[Union[str, Path]] = None,
    timeout: Optional[int] = None,
) -> Tuple[int, str, str]:
    """Run a command and return ``(returncode, stdout, stderr)``.

    Never raises: a missing executable or a timeout is reported through the
    return code so probes can treat it as an ordinary failed check.
    """
    logger.debug(f"Running: {' '.join(cmd)}" + (f" (cwd={cwd})" if cwd else ""))
    try:
        result = subprocess.run(
            cmd,
            cwd=str(cwd) if cwd else None,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except FileNotFoundError:
        logger.debug(f"Command not found: {cmd[0]}")
        return COMMAND_NOT_FOUND, "", f"{cmd[0]}: command not found"
    except subprocess.TimeoutExpired:
        logger.debug(f"Command timed out after {timeout}s: {' '.join(cmd)}")
        return COMMAND_TIMED_OUT, "", f"timed out after {timeout}s"
    except OSError as exc:
        return 1, "", str(exc)

    if result.returncode != 0:
        logger.debug(f"Exit code {result.returncode}: {result.stderr.strip()}")
    return result.returncode, result.stdout, result.stderr


def run_checked(
    cmd: List[str],
    cwd: Optional[Union[str, Path]] = None,
    timeout: Optional[int] = None,
) -> str:
    """Run a command and return stdout, raising CommandError on failure."""
    rc, out, err = run_cmd(cmd, cwd=cwd, timeout=timeout)
    if rc != 0:
        raise CommandError(cmd, rc, err)
    return out
