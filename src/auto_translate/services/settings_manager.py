"""Settings Manager - Handles API key and language configuration."""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


class SettingsManager:
    """
    Manages settings and API key configuration.

    Reads from a .env file in the project root, falling back to the
    process environment.

    Recognized variables:
        GEMINI_API_KEY: API key for the remote translator.
        AUTO_TRANSLATE_LANGUAGE: Initial target language code.
        AUTO_TRANSLATE_MODEL: Gemini model override.
    """

    def __init__(self, project_root: Optional[Path] = None):
        """
        Initialize settings manager.

        Args:
            project_root: Path to project root where .env is located.
                         If None, uses the current working directory.
        """
        if project_root is None:
            project_root = Path.cwd()

        env_path = project_root / ".env"
        load_dotenv(dotenv_path=env_path)

        self._project_root = project_root

    def get_gemini_api_key(self) -> Optional[str]:
        """Get the Gemini API key from environment."""
        return self._get_stripped("GEMINI_API_KEY")

    def get_initial_language(self) -> Optional[str]:
        """Get the initial target language code from environment."""
        return self._get_stripped("AUTO_TRANSLATE_LANGUAGE")

    def get_model_name(self) -> Optional[str]:
        """Get the translation model override, if any."""
        return self._get_stripped("AUTO_TRANSLATE_MODEL")

    def reload_env(self) -> None:
        """Reload environment variables from .env file."""
        env_path = self._project_root / ".env"
        load_dotenv(dotenv_path=env_path, override=True)

    def _get_stripped(self, name: str) -> Optional[str]:
        value = os.getenv(name)
        return value.strip() if value and value.strip() else None
