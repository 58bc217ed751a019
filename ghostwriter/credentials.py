"""
Credential collaborators.

The generation client never touches API keys itself. It asks a KeySelector
whether a credential is present and, after an authorization failure, asks it
to select a fresh one. Where that key comes from is up to the host: the
Streamlit page reloads the project .env, the CLI prompts on the terminal.
"""

import os
from getpass import getpass
from pathlib import Path
from typing import Optional, Protocol

from dotenv import dotenv_values, load_dotenv, set_key, unset_key

from ghostwriter.config import config
from ghostwriter.utils.logging import get_logger

logger = get_logger(__name__)

KEY_ENV_VARS = ("GOOGLE_API_KEY", "GEMINI_API_KEY")


class KeySelector(Protocol):
    def has_credential(self) -> bool:
        ...

    def select_credential(self) -> None:
        ...


def current_api_key() -> Optional[str]:
    """The key the next request will use."""
    return config.api.resolve_key()


class EnvKeySelector:
    """Keys live in the environment and the project .env file.

    Selecting a credential re-reads .env with override, so a key saved from
    the settings panel replaces a rejected one.
    """

    def __init__(self, env_file: Optional[Path] = None):
        self.env_file = Path(env_file) if env_file else config.paths.ENV_FILE

    def has_credential(self) -> bool:
        return bool(current_api_key())

    def select_credential(self) -> None:
        if not self.env_file.exists():
            logger.warning("env_file_missing", path=str(self.env_file))
            return
        # Drop every alias first so a rejected key cannot shadow the reloaded one
        for name in KEY_ENV_VARS:
            os.environ.pop(name, None)
        load_dotenv(self.env_file, override=True)
        logger.info("credential_reloaded", path=str(self.env_file),
                    has_credential=self.has_credential())


class PromptKeySelector:
    """Interactive selection on the terminal; blocks until a key is entered."""

    def __init__(self, prompt: str = "Gemini API key: ", env_var: str = "GOOGLE_API_KEY",
                 reader=getpass):
        self.prompt = prompt
        self.env_var = env_var
        self._reader = reader

    def has_credential(self) -> bool:
        return bool(current_api_key())

    def select_credential(self) -> None:
        key = self._reader(self.prompt).strip()
        if not key:
            logger.warning("credential_not_entered")
            return
        # Replace every alias so a stale key cannot shadow the new one
        for name in KEY_ENV_VARS:
            os.environ.pop(name, None)
        os.environ[self.env_var] = key
        logger.info("credential_selected", env_var=self.env_var)


def save_api_key(value: str, env_file: Optional[Path] = None,
                 env_var: str = "GOOGLE_API_KEY") -> None:
    """Save or update the API key in .env and the running environment.

    Other key aliases are removed from both, otherwise a stale alias could
    win on the next reload.
    """
    env_path = Path(env_file) if env_file else config.paths.ENV_FILE

    # Ensure the .env file exists before set_key tries to read it
    if not env_path.exists():
        env_path.touch()

    # set_key rewrites one entry and preserves the rest of the file's formatting
    set_key(str(env_path), env_var, value)
    stale = dotenv_values(env_path)
    for name in KEY_ENV_VARS:
        if name == env_var:
            continue
        if name in stale:
            unset_key(str(env_path), name)
        os.environ.pop(name, None)
    os.environ[env_var] = value
    logger.info("credential_saved", env_var=env_var, path=str(env_path))
