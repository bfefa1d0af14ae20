"""Handler for window commands."""

from typing import Any, Dict, Sequence

from mcp.types import TextContent

from ..models import WindowCommandRequest
from .base import BaseHandler


class VimWindowHandler(BaseHandler):
    """Handler for splitting, closing and navigating windows."""

    name = "vim_window"
    description = "Manipulate Neovim windows (split, vsplit, only, close, wincmd h/j/k/l)"

    async def run_tool(self, arguments: Dict[str, Any]) -> Sequence[TextContent]:
        """Execute the tool with given arguments."""
        request = self.parse_arguments(WindowCommandRequest, arguments)
        result = await self.session.manipulate_window(request.command)
        return self.result_response(result)
