"""MCP Neovim Server implementation."""

import json
import logging
from typing import Annotated, List, Sequence

from mcp.server.fastmcp import FastMCP
from mcp.types import TextContent
from pydantic import Field

from .config import Settings
from .handlers import (
    VimBufferHandler,
    VimCommandHandler,
    VimEditHandler,
    VimFileTreeHandler,
    VimFindFileHandler,
    VimInsertMultipleHandler,
    VimMarkHandler,
    VimOpenHandler,
    VimPwdHandler,
    VimRegisterHandler,
    VimStatusHandler,
    VimVisualHandler,
    VimWindowHandler,
)
from .handlers.base import format_buffer_contents
from .models import EditMode, InsertEntry, WindowCommand
from .neovim import NeovimSession
from .version import __version__

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("mcp-neovim-server")

app = FastMCP("mcp-neovim-server")

# One session for the whole process, shared by every handler
settings = Settings.from_env()
session = NeovimSession(settings)

# Initialize handlers
buffer_handler = VimBufferHandler(session)
command_handler = VimCommandHandler(session)
status_handler = VimStatusHandler(session)
edit_handler = VimEditHandler(session)
window_handler = VimWindowHandler(session)
mark_handler = VimMarkHandler(session)
register_handler = VimRegisterHandler(session)
visual_handler = VimVisualHandler(session)
open_handler = VimOpenHandler(session)
pwd_handler = VimPwdHandler(session)
find_file_handler = VimFindFileHandler(session)
file_tree_handler = VimFileTreeHandler(session)
insert_multiple_handler = VimInsertMultipleHandler(session)


# Register resources
@app.resource(
    "nvim://session",
    name="Current neovim session",
    description="Current neovim text editor session",
    mime_type="text/plain",
)
async def read_session() -> str:
    """Numbered lines of the active buffer."""
    result = await session.get_buffer_contents()
    if not result.ok:
        raise RuntimeError(result.text)
    return format_buffer_contents(result.value)


@app.resource(
    "nvim://buffers",
    name="Open Neovim buffers",
    description="List of all open buffers in the current Neovim session",
    mime_type="application/json",
)
async def read_buffers() -> str:
    """Open buffers as a JSON array."""
    result = await session.get_open_buffers()
    if not result.ok:
        raise RuntimeError(result.text)
    return json.dumps([info.to_dict() for info in result.value], indent=2)


# Register tools
@app.tool(name=buffer_handler.name, description=buffer_handler.description)
async def vim_buffer(
    filename: Annotated[
        str,
        Field(description="File name to edit (can be empty, assume buffer is already open)"),
    ] = "",
) -> Sequence[TextContent]:
    return await buffer_handler.run_tool({"filename": filename})


@app.tool(name=command_handler.name, description=command_handler.description)
async def vim_command(
    command: Annotated[
        str,
        Field(
            description="Neovim command to enter for navigation and spot editing. "
            "For shell commands use without leading colon (e.g. '!ls')."
        ),
    ],
) -> Sequence[TextContent]:
    return await command_handler.run_tool({"command": command})


@app.tool(name=status_handler.name, description=status_handler.description)
async def vim_status(
    filename: Annotated[
        str,
        Field(description="File name to get status for (can be empty, assume buffer is already open)"),
    ] = "",
) -> Sequence[TextContent]:
    return await status_handler.run_tool({"filename": filename})


@app.tool(name=edit_handler.name, description=edit_handler.description)
async def vim_edit(
    startLine: Annotated[int, Field(ge=1, description="Line number to start editing")],
    mode: Annotated[EditMode, Field(description="Mode for editing lines")],
    lines: Annotated[str, Field(description="Lines of strings to insert or replace")],
) -> Sequence[TextContent]:
    return await edit_handler.run_tool(
        {"startLine": startLine, "mode": mode, "lines": lines}
    )


@app.tool(name=window_handler.name, description=window_handler.description)
async def vim_window(
    command: Annotated[WindowCommand, Field(description="Window command")],
) -> Sequence[TextContent]:
    return await window_handler.run_tool({"command": command})


@app.tool(name=mark_handler.name, description=mark_handler.description)
async def vim_mark(
    mark: Annotated[str, Field(pattern=r"^[a-z]$", description="Mark name (a-z)")],
    line: Annotated[int, Field(ge=1, description="Line number")],
    column: Annotated[int, Field(ge=0, description="Column number")],
) -> Sequence[TextContent]:
    return await mark_handler.run_tool({"mark": mark, "line": line, "column": column})


@app.tool(name=register_handler.name, description=register_handler.description)
async def vim_register(
    register: Annotated[
        str, Field(pattern=r'^[a-z"]$', description='Register name (a-z or ")')
    ],
    content: Annotated[str, Field(description="Content to store in register")],
) -> Sequence[TextContent]:
    return await register_handler.run_tool({"register": register, "content": content})


@app.tool(name=visual_handler.name, description=visual_handler.description)
async def vim_visual(
    startLine: Annotated[int, Field(ge=1, description="Starting line number")],
    startColumn: Annotated[int, Field(ge=0, description="Starting column number")],
    endLine: Annotated[int, Field(ge=1, description="Ending line number")],
    endColumn: Annotated[int, Field(ge=0, description="Ending column number")],
) -> Sequence[TextContent]:
    return await visual_handler.run_tool(
        {
            "startLine": startLine,
            "startColumn": startColumn,
            "endLine": endLine,
            "endColumn": endColumn,
        }
    )


@app.tool(name=open_handler.name, description=open_handler.description)
async def vim_open(
    path: Annotated[str, Field(description="Path of the file to open")],
) -> Sequence[TextContent]:
    return await open_handler.run_tool({"path": path})


@app.tool(name=pwd_handler.name, description=pwd_handler.description)
async def vim_pwd() -> Sequence[TextContent]:
    return await pwd_handler.run_tool({})


@app.tool(name=find_file_handler.name, description=find_file_handler.description)
async def vim_find_file(
    filename: Annotated[str, Field(description="File name or part of it")],
) -> Sequence[TextContent]:
    return await find_file_handler.run_tool({"filename": filename})


@app.tool(name=file_tree_handler.name, description=file_tree_handler.description)
async def vim_file_tree() -> Sequence[TextContent]:
    return await file_tree_handler.run_tool({})


@app.tool(
    name=insert_multiple_handler.name,
    description=insert_multiple_handler.description,
)
async def vim_insert_multiple(
    inserts: Annotated[
        List[InsertEntry],
        Field(description="Blocks to insert, each with startLine and content"),
    ],
) -> Sequence[TextContent]:
    return await insert_multiple_handler.run_tool(
        {"inserts": [entry.to_dict() for entry in inserts]}
    )


async def main() -> None:
    """Main entry point for the MCP Neovim server."""
    logger.info(f"Starting MCP Neovim server v{__version__}")
    logger.info(
        f"Neovim socket: {settings.socket_path}, "
        f"shell commands {'enabled' if settings.allow_shell_commands else 'disabled'}"
    )
    await app.run_stdio_async()


if __name__ == "__main__":
    import asyncio

    asyncio.run(main())
