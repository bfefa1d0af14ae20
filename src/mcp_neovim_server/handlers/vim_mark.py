"""Handler for setting marks."""

from typing import Any, Dict, Sequence

from mcp.types import TextContent

from ..models import SetMarkRequest
from .base import BaseHandler


class VimMarkHandler(BaseHandler):
    """Handler for setting a named mark at a position."""

    name = "vim_mark"
    description = "Set a mark at a specific position"

    async def run_tool(self, arguments: Dict[str, Any]) -> Sequence[TextContent]:
        """Execute the tool with given arguments."""
        request = self.parse_arguments(SetMarkRequest, arguments)
        result = await self.session.set_mark(
            request.mark, request.line, request.column
        )
        return self.result_response(result)
