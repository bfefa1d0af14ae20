"""Handler for inserting several blocks in one call."""

import logging
from typing import Any, Dict, Sequence

from mcp.types import TextContent

from ..models import InsertMultipleRequest
from .base import BaseHandler

logger = logging.getLogger("mcp-neovim-server")

FORMAT_COMMAND = "normal! gg=G"


class VimInsertMultipleHandler(BaseHandler):
    """Handler for inserting blocks at positions of the original buffer."""

    name = "vim_insert_multiple"
    description = (
        "Insert several blocks of text in one call. Each startLine refers to the "
        "buffer as it was before any of the insertions. The buffer is re-indented "
        "afterwards and returned with line numbers."
    )

    async def run_tool(self, arguments: Dict[str, Any]) -> Sequence[TextContent]:
        """Execute the tool with given arguments."""
        request = self.parse_arguments(InsertMultipleRequest, arguments)

        # Top to bottom; blocks sharing a line keep their request order
        ordered = sorted(
            enumerate(request.inserts, start=1), key=lambda item: item[1].start_line
        )

        # Lines added by earlier blocks push later targets down
        offset = 0
        for number, entry in ordered:
            result = await self.session.edit_lines(
                entry.start_line + offset, "insert", entry.content
            )
            if not result.ok:
                return self.text_response(
                    f"Error inserting block {number} at line {entry.start_line}: "
                    f"{result.text}"
                )
            offset += len(entry.content.split("\n"))

        formatted = await self.session.send_command(FORMAT_COMMAND)
        if not formatted.ok:
            logger.warning(f"Auto-format skipped: {formatted.text}")

        return self.buffer_response(await self.session.get_buffer_contents())
