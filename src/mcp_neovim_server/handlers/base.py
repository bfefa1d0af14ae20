"""Base handler for MCP Neovim Server."""

import logging
from typing import Any, Dict, Sequence, Type, TypeVar

from mcp.types import TextContent
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ..config import SHELL_DISABLED_MESSAGE
from ..models import BufferContents, EditorResult
from ..neovim import NeovimSession, normalize_command

logger = logging.getLogger("mcp-neovim-server")

RequestT = TypeVar("RequestT", bound=BaseModel)


def format_buffer_contents(contents: BufferContents) -> str:
    """Render buffer contents as ``"<line>: <text>"`` rows."""
    return "\n".join(f"{number}: {line}" for number, line in contents.items())


def is_shell_command(command: str) -> bool:
    """Check whether a command string is a ``!`` shell command."""
    return normalize_command(command).startswith("!")


class BaseHandler:
    """Base class for handlers."""

    name: str = ""
    description: str = ""

    def __init__(self, session: NeovimSession | None = None):
        """Initialize the handler."""
        self.session = session if session is not None else NeovimSession()

    def parse_arguments(
        self, model: Type[RequestT], arguments: Dict[str, Any]
    ) -> RequestT:
        """Validate tool arguments before anything is sent to Neovim.

        Raises:
            RuntimeError: If an argument is missing or malformed
        """
        try:
            return model.model_validate(arguments or {})
        except PydanticValidationError as e:
            for error in e.errors():
                if error["type"] == "missing":
                    field = ".".join(str(part) for part in error["loc"])
                    raise RuntimeError(f"Missing required argument: {field}") from e
            raise RuntimeError(f"Invalid arguments for {self.name}: {e}") from e

    def shell_allowed(self) -> bool:
        return self.session.settings.allow_shell_commands

    def shell_disabled_response(self) -> Sequence[TextContent]:
        logger.info(f"{self.name}: shell command execution is disabled")
        return self.text_response(SHELL_DISABLED_MESSAGE)

    @staticmethod
    def text_response(text: str) -> Sequence[TextContent]:
        return [TextContent(type="text", text=text)]

    def result_response(self, result: EditorResult) -> Sequence[TextContent]:
        return self.text_response(result.text)

    def buffer_response(self, result: EditorResult) -> Sequence[TextContent]:
        """Numbered buffer lines, or the error when the read failed."""
        if not result.ok:
            return self.text_response(result.text)
        return self.text_response(format_buffer_contents(result.value))

    async def run_tool(self, arguments: Dict[str, Any]) -> Sequence[TextContent]:
        """Execute the tool with given arguments."""
        raise NotImplementedError
