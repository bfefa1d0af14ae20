"""Handler for setting register contents."""

from typing import Any, Dict, Sequence

from mcp.types import TextContent

from ..models import SetRegisterRequest
from .base import BaseHandler


class VimRegisterHandler(BaseHandler):
    """Handler for storing text in a register."""

    name = "vim_register"
    description = "Set content of a register"

    async def run_tool(self, arguments: Dict[str, Any]) -> Sequence[TextContent]:
        """Execute the tool with given arguments."""
        request = self.parse_arguments(SetRegisterRequest, arguments)
        result = await self.session.set_register(request.name, request.content)
        return self.result_response(result)
