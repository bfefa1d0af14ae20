"""MCP Neovim Server package."""

import asyncio

from .server import main
from .version import __version__


def run() -> None:
    """Run the MCP Neovim Server."""
    asyncio.run(main())


__all__ = ["__version__", "main", "run"]
