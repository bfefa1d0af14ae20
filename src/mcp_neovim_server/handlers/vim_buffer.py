"""Handler for reading the current buffer."""

from typing import Any, Dict, Sequence

from mcp.types import TextContent

from .base import BaseHandler


class VimBufferHandler(BaseHandler):
    """Handler for reading the active buffer with line numbers."""

    name = "vim_buffer"
    description = "Current VIM text editor buffer with line numbers shown"

    async def run_tool(self, arguments: Dict[str, Any]) -> Sequence[TextContent]:
        """Execute the tool with given arguments."""
        # filename is accepted for compatibility; the active buffer is always read
        result = await self.session.get_buffer_contents()
        return self.buffer_response(result)
