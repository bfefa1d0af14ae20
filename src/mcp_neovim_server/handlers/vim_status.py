"""Handler for reporting editor status."""

import json
from typing import Any, Dict, Sequence

from mcp.types import TextContent

from .base import BaseHandler


class VimStatusHandler(BaseHandler):
    """Handler for the editor status snapshot."""

    name = "vim_status"
    description = "Get the status of the VIM editor"

    async def run_tool(self, arguments: Dict[str, Any]) -> Sequence[TextContent]:
        """Execute the tool with given arguments."""
        result = await self.session.get_status()
        if not result.ok:
            return self.text_response(result.text)
        return self.text_response(json.dumps(result.value.to_dict(), indent=2))
