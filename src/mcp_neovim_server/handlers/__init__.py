"""Handlers for MCP Neovim Server."""

from .vim_buffer import VimBufferHandler
from .vim_command import VimCommandHandler
from .vim_edit import VimEditHandler
from .vim_file_tree import VimFileTreeHandler
from .vim_find_file import VimFindFileHandler
from .vim_insert_multiple import VimInsertMultipleHandler
from .vim_mark import VimMarkHandler
from .vim_open import VimOpenHandler
from .vim_pwd import VimPwdHandler
from .vim_register import VimRegisterHandler
from .vim_status import VimStatusHandler
from .vim_visual import VimVisualHandler
from .vim_window import VimWindowHandler

__all__ = [
    "VimBufferHandler",
    "VimCommandHandler",
    "VimEditHandler",
    "VimFileTreeHandler",
    "VimFindFileHandler",
    "VimInsertMultipleHandler",
    "VimMarkHandler",
    "VimOpenHandler",
    "VimPwdHandler",
    "VimRegisterHandler",
    "VimStatusHandler",
    "VimVisualHandler",
    "VimWindowHandler",
]
