"""Environment configuration and loading for mocked.

Centralizes config paths and dotenv loading.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# User config directory (stores .env)
USER_CONFIG_DIR = Path.home() / ".config" / "mocked"


def get_user_config_dir() -> Path:
    """Get the user config directory, respecting MOCKED_CONFIG_DIR.

    Evaluated at call time so tests and .env files can redirect it.
    """
    return Path(os.environ.get("MOCKED_CONFIG_DIR", str(USER_CONFIG_DIR)))


def load_user_env() -> None:
    """Load ${MOCKED_CONFIG_DIR}/.env (typically ~/.config/mocked/.env).

    Variables already present in the environment win over the file.
    """
    load_dotenv(dotenv_path=get_user_config_dir() / ".env")

