"""Handler for inserting and replacing buffer lines."""

import logging
from typing import Any, Dict, Sequence

from mcp.types import TextContent

from ..models import EditLinesRequest
from .base import BaseHandler

logger = logging.getLogger("mcp-neovim-server")


class VimEditHandler(BaseHandler):
    """Handler for line edits in the active buffer."""

    name = "vim_edit"
    description = (
        "Edit lines using insert, replace, or replaceAll in the VIM editor. "
        "insert will insert lines before startLine. replace will replace lines "
        "starting at startLine to the end of the buffer. replaceAll replaces "
        "the entire buffer."
    )

    async def run_tool(self, arguments: Dict[str, Any]) -> Sequence[TextContent]:
        """Execute the tool with given arguments."""
        request = self.parse_arguments(EditLinesRequest, arguments)
        logger.info(
            f"Editing lines: {request.start_line}, {request.mode}, {request.lines!r}"
        )
        result = await self.session.edit_lines(
            request.start_line, request.mode, request.lines
        )
        return self.result_response(result)
