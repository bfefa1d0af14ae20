"""Environment configuration for the MCP Neovim Server."""

import os
from typing import Mapping, Optional

from pydantic import BaseModel, Field

# Environment variable names
ENV_ALLOW_SHELL_COMMANDS = "ALLOW_SHELL_COMMANDS"
ENV_SOCKET_PATH = "NVIM_SOCKET_PATH"

DEFAULT_SOCKET_PATH = "/tmp/nvim"

SHELL_DISABLED_MESSAGE = (
    "Shell command execution is disabled. "
    f"Set {ENV_ALLOW_SHELL_COMMANDS}=true environment variable to enable shell commands."
)


class Settings(BaseModel):
    """Runtime settings read from the environment."""

    allow_shell_commands: bool = Field(
        False, description="Whether '!' shell commands may run inside Neovim"
    )
    socket_path: str = Field(
        DEFAULT_SOCKET_PATH, description="Path of the Neovim RPC socket"
    )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from environment variables.

        Args:
            environ: Mapping to read from. Defaults to ``os.environ``.

        Returns:
            Settings: Parsed settings. Shell commands are enabled only when
            ``ALLOW_SHELL_COMMANDS`` is ``true``; an unset or empty
            ``NVIM_SOCKET_PATH`` falls back to ``/tmp/nvim``.
        """
        if environ is None:
            environ = os.environ
        allow_shell = environ.get(ENV_ALLOW_SHELL_COMMANDS, "").strip().lower()
        return cls(
            allow_shell_commands=allow_shell == "true",
            socket_path=environ.get(ENV_SOCKET_PATH) or DEFAULT_SOCKET_PATH,
        )
