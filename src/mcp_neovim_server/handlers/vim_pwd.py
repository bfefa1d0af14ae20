"""Handler for the working directory."""

from typing import Any, Dict, Sequence

from mcp.types import TextContent

from .base import BaseHandler


class VimPwdHandler(BaseHandler):
    """Handler for printing Neovim's working directory."""

    name = "vim_pwd"
    description = "Get the current working directory of the VIM editor"

    async def run_tool(self, arguments: Dict[str, Any]) -> Sequence[TextContent]:
        """Execute the tool with given arguments."""
        result = await self.session.get_cwd()
        return self.result_response(result)
