"""Handler for listing the directory tree."""

import posixpath
from typing import Any, Dict, Iterable, Sequence

from mcp.types import TextContent

from ..neovim import NO_OUTPUT
from .base import BaseHandler

TREE_COMMAND = "!find . -not -path './.git' -not -path './.git/*' | sort"


def render_tree(paths: Iterable[str]) -> str:
    """Indent ``find`` output by depth.

    ``./src/app.py`` becomes an ``app.py`` row nested under ``src``.
    """
    rows = ["."]
    for path in paths:
        path = path.strip()
        if not path or path == ".":
            continue
        relative = path[2:] if path.startswith("./") else path
        depth = relative.count("/") + 1
        rows.append(f"{'  ' * depth}{posixpath.basename(relative)}")
    return "\n".join(rows)


class VimFileTreeHandler(BaseHandler):
    """Handler for the tree of the editor's working directory (requires shell commands)."""

    name = "vim_file_tree"
    description = (
        "Show the directory tree of the editor's working directory. "
        "Requires ALLOW_SHELL_COMMANDS=true."
    )

    async def run_tool(self, arguments: Dict[str, Any]) -> Sequence[TextContent]:
        """Execute the tool with given arguments."""
        if not self.shell_allowed():
            return self.shell_disabled_response()

        result = await self.session.send_command(TREE_COMMAND)
        if not result.ok:
            return self.result_response(result)
        # An empty directory lists nothing
        paths = [] if result.text == NO_OUTPUT else result.text.splitlines()
        return self.text_response(render_tree(paths))
