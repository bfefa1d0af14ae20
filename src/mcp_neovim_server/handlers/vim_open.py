"""Handler for opening files."""

from typing import Any, Dict, Sequence

from mcp.types import TextContent

from ..models import OpenFileRequest
from .base import BaseHandler


class VimOpenHandler(BaseHandler):
    """Handler for opening a file and returning its buffer."""

    name = "vim_open"
    description = "Open a file in the current window and return its contents with line numbers"

    async def run_tool(self, arguments: Dict[str, Any]) -> Sequence[TextContent]:
        """Execute the tool with given arguments."""
        request = self.parse_arguments(OpenFileRequest, arguments)
        result = await self.session.open_file(request.path)
        return self.buffer_response(result)
