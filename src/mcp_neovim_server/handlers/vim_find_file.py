"""Handler for finding files under the working directory."""

import shlex
from typing import Any, Dict, Sequence

from mcp.types import TextContent

from ..models import FindFileRequest
from ..neovim import NO_OUTPUT
from .base import BaseHandler


def build_find_command(filename: str) -> str:
    """Shell command listing files whose name contains ``filename``."""
    pattern = shlex.quote(f"*{filename}*")
    return f"!find . -type f -iname {pattern} -not -path '*/.git/*'"


class VimFindFileHandler(BaseHandler):
    """Handler for locating files by name (requires shell commands)."""

    name = "vim_find_file"
    description = (
        "Find files by name under the editor's working directory. "
        "Requires ALLOW_SHELL_COMMANDS=true."
    )

    async def run_tool(self, arguments: Dict[str, Any]) -> Sequence[TextContent]:
        """Execute the tool with given arguments."""
        request = self.parse_arguments(FindFileRequest, arguments)
        if not self.shell_allowed():
            return self.shell_disabled_response()

        result = await self.session.send_command(build_find_command(request.filename))
        if result.ok and result.text == NO_OUTPUT:
            return self.text_response(f"No files matching '{request.filename}' found")
        return self.result_response(result)
