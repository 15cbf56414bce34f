"""Environment file generation with a fresh wallet seed."""
import secrets
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Tuple

SEED_BYTES = 32
SEED_PLACEHOLDER = "your_64_character_wallet_seed_here"

NETWORK_ID = "preprod"
PROOF_SERVER_URL = "http://127.0.0.1:6300"
DEBUG_LEVEL = "info"
AUTO_START_PROOF_SERVER = "true"

ENV_FILE = ".env"
ENV_EXAMPLE_FILE = ".env.example"

# (section comment, keys) in file order
SECTIONS = (
    ("Network Configuration", ("MIDNIGHT_NETWORK", "PROOF_SERVER_URL")),
    ("Wallet Configuration (KEEP PRIVATE!)", ("WALLET_SEED",)),
    ("Contract Configuration", ("CONTRACT_NAME",)),
    ("Development Settings", ("DEBUG_LEVEL", "AUTO_START_PROOF_SERVER")),
)

SECURITY_FOOTER = """# Security Warning:
# Keep your wallet seed private and secure!
# Never commit this file to version control.
# Add .env to your .gitignore file.
"""


def generate_seed() -> str:
    """32 random bytes, hex-encoded (64 characters)."""
    return secrets.token_hex(SEED_BYTES)


def environment_values(seed: str, contract_name: str) -> Dict[str, str]:
    return {
        "MIDNIGHT_NETWORK": NETWORK_ID,
        "PROOF_SERVER_URL": PROOF_SERVER_URL,
        "WALLET_SEED": seed,
        "CONTRACT_NAME": contract_name,
        "DEBUG_LEVEL": DEBUG_LEVEL,
        "AUTO_START_PROOF_SERVER": AUTO_START_PROOF_SERVER,
    }


def _render(header: str, values: Dict[str, str], footer: str = "") -> str:
    lines = ["# Midnight Network Configuration", header, ""]
    for title, keys in SECTIONS:
        lines.append(f"# {title}")
        lines.extend(f"{key}={values[key]}" for key in keys)
        lines.append("")
    content = "\n".join(lines)
    return content + footer if footer else content


class WalletGenerator:
    """Writes ``.env`` with a real seed and ``.env.example`` with a placeholder."""

    def generate(self, project_path: Path, contract_name: str) -> Tuple[Path, Path]:
        """Write the environment file pair.

        Args:
            project_path: Generated project directory
            contract_name: Value for CONTRACT_NAME

        Returns:
            Paths of (.env, .env.example)
        """
        generated_on = datetime.now(timezone.utc).isoformat()

        env_path = project_path / ENV_FILE
        env_path.write_text(_render(
            f"# Generated on {generated_on}",
            environment_values(generate_seed(), contract_name),
            SECURITY_FOOTER,
        ))
        env_path.chmod(0o600)

        example_path = project_path / ENV_EXAMPLE_FILE
        example_path.write_text(_render(
            "# Copy this file to .env and fill in your values",
            environment_values(SEED_PLACEHOLDER, contract_name),
        ))

        return env_path, example_path

