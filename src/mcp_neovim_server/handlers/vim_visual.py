"""Handler for visual selections."""

from typing import Any, Dict, Sequence

from mcp.types import TextContent

from ..models import VisualSelectRequest
from .base import BaseHandler


class VimVisualHandler(BaseHandler):
    """Handler for making a visual selection."""

    name = "vim_visual"
    description = "Make a visual selection"

    async def run_tool(self, arguments: Dict[str, Any]) -> Sequence[TextContent]:
        """Execute the tool with given arguments."""
        request = self.parse_arguments(VisualSelectRequest, arguments)
        result = await self.session.visual_select(
            request.start_line,
            request.start_column,
            request.end_line,
            request.end_column,
        )
        return self.result_response(result)
