"""create-mn-app runtime configuration and settings."""
import os
from dataclasses import dataclass
from typing import Optional


@dataclass
class RuntimeConfig:
    """Runtime configuration for a creation run.

    Attributes:
        command_timeout: Timeout in seconds for availability probes (default: 10)
        install_timeout: Timeout in seconds for dependency installs and scripts (default: 600)
        clone_timeout: Timeout in seconds for remote template clones (default: 300)
        update_timeout: Timeout in seconds for compiler updates (default: 600)
        git_host: Base URL remote template repositories are cloned from
        proof_server_image: Container image the proof server probe looks for
        min_python: Lowest interpreter version the CLI runs on
        mock: Simulate sub-processes instead of running them
    """

    command_timeout: int = 10
    install_timeout: int = 600  # 10 minutes for a cold dependency install
    clone_timeout: int = 300
    update_timeout: int = 600

    git_host: str = "https://github.com"
    proof_server_image: str = "midnightntwrk/proof-server"
    min_python: str = "3.10"

    mock: bool = False

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """Create config from environment variables.

        Environment variables:
            CREATE_MN_APP_COMMAND_TIMEOUT: Probe timeout in seconds
            CREATE_MN_APP_INSTALL_TIMEOUT: Install/run-script timeout in seconds
            CREATE_MN_APP_CLONE_TIMEOUT: Clone timeout in seconds
            CREATE_MN_APP_UPDATE_TIMEOUT: Compiler update timeout in seconds
            CREATE_MN_APP_GIT_HOST: Git host for remote templates
            CREATE_MN_APP_PROOF_SERVER_IMAGE: Proof server image name
            CREATE_MN_APP_MIN_PYTHON: Minimum interpreter version
            CREATE_MN_APP_MOCK: "1" to simulate sub-processes

        Returns:
            RuntimeConfig instance with values from environment or defaults
        """
        return cls(
            command_timeout=int(
                os.getenv("CREATE_MN_APP_COMMAND_TIMEOUT", cls.command_timeout)
            ),
            install_timeout=int(
                os.getenv("CREATE_MN_APP_INSTALL_TIMEOUT", cls.install_timeout)
            ),
            clone_timeout=int(
                os.getenv("CREATE_MN_APP_CLONE_TIMEOUT", cls.clone_timeout)
            ),
            update_timeout=int(
                os.getenv("CREATE_MN_APP_UPDATE_TIMEOUT", cls.update_timeout)
            ),
            git_host=os.getenv("CREATE_MN_APP_GIT_HOST", cls.git_host).rstrip("/"),
            proof_server_image=os.getenv(
                "CREATE_MN_APP_PROOF_SERVER_IMAGE", cls.proof_server_image
            ),
            min_python=os.getenv("CREATE_MN_APP_MIN_PYTHON", cls.min_python),
            mock=os.getenv("CREATE_MN_APP_MOCK") == "1",
        )


# Global config instance (can be overridden)
_config: Optional[RuntimeConfig] = None


def get_config() -> RuntimeConfig:
    """Get the global runtime configuration.

    Returns:
        RuntimeConfig instance (creates from environment if not set)
    """
    global _config
    if _config is None:
        _config = RuntimeConfig.from_env()
    return _config


def set_config(config: Optional[RuntimeConfig]):
    """Set the global runtime configuration.

    Args:
        config: RuntimeConfig instance to use globally, or None to reload from env
    """
    global _config
    _config = config
