"""Handler for sending commands to Neovim."""

import logging
from typing import Any, Dict, Sequence

from mcp.types import TextContent

from ..models import CommandRequest
from .base import BaseHandler, is_shell_command

logger = logging.getLogger("mcp-neovim-server")


class VimCommandHandler(BaseHandler):
    """Handler for Ex commands and opt-in shell commands."""

    name = "vim_command"
    description = (
        "Send a command to VIM for navigation, spot editing, and line deletion. "
        "For shell commands like ls, use without the leading colon (e.g. '!ls' not ':!ls')."
    )

    async def run_tool(self, arguments: Dict[str, Any]) -> Sequence[TextContent]:
        """Execute the tool with given arguments."""
        request = self.parse_arguments(CommandRequest, arguments)
        logger.info(f"Executing command: {request.command}")

        if is_shell_command(request.command) and not self.shell_allowed():
            return self.shell_disabled_response()

        result = await self.session.send_command(request.command)
        return self.result_response(result)
