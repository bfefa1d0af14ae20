"""Session adapter for a running Neovim instance.

Every public method of :class:`NeovimSession` attaches to the configured RPC
socket, performs one unit of work and returns an :class:`EditorResult`.
Failures never propagate to the caller: they are logged and turned into an
error result that still carries a fallback value.
"""

import asyncio
import json
import logging
import string
import traceback
from contextlib import contextmanager
from typing import Any, Callable, Dict, Generator, List, Tuple

import pynvim
from pynvim.api import Nvim, NvimError

from .config import SHELL_DISABLED_MESSAGE, Settings
from .errors import (
    EditorCommandError,
    EditorConnectionError,
    InternalError,
    SessionError,
    ValidationError,
)
from .models import (
    WINDOW_COMMANDS,
    BufferContents,
    BufferInfo,
    EditorResult,
    EditorStatus,
    WindowInfo,
)

logger = logging.getLogger("mcp-neovim-server")

MARK_NAMES = string.ascii_lowercase
STATUS_REGISTERS = string.ascii_lowercase + '"' + string.digits
WRITABLE_REGISTERS = string.ascii_lowercase + '"'
# v, V and CTRL-V
VISUAL_MODES = ("v", "V", "\x16")
EDIT_MODES = ("insert", "replace", "replaceAll")
NO_OUTPUT = "No output from command"


def escape_single_quotes(text: str) -> str:
    """Escape text for use inside a single-quoted Vim string literal."""
    return text.replace("'", "''")


def normalize_command(command: str) -> str:
    """Drop the leading blanks and colons Vim ignores before an Ex command."""
    return command.lstrip(" \t:")


class NeovimSession:
    """Single point of contact with the external Neovim process."""

    def __init__(self, settings: Settings | None = None):
        """Initialize the session."""
        self.settings = settings if settings is not None else Settings.from_env()

    @contextmanager
    def connect(self) -> Generator[Nvim, None, None]:
        """Attach to the Neovim socket and close the handle afterwards.

        Attaching to a listening socket reuses the running editor session, so
        reconnecting on every call has no side effects on the editor.

        Raises:
            EditorConnectionError: If the socket cannot be attached
        """
        socket_path = self.settings.socket_path
        try:
            nvim = pynvim.attach("socket", path=socket_path)
        except Exception as e:
            raise EditorConnectionError(
                f"Cannot connect to Neovim at {socket_path}: {e}",
                details={"socket_path": socket_path},
            ) from e
        try:
            yield nvim
        finally:
            nvim.close()

    def _with_connection(self, work: Callable[..., Any], *args: Any) -> Any:
        with self.connect() as nvim:
            return work(nvim, *args)

    async def _run(
        self,
        failure_message: str,
        work: Callable[..., Any],
        *args: Any,
        fallback: Any = None,
    ) -> EditorResult:
        """Run ``work(nvim, *args)`` on a fresh connection.

        The blocking RPC round trip runs in a worker thread. Errors Neovim
        reports are returned verbatim; anything else collapses to
        ``failure_message``.

        Args:
            failure_message (str): Generic message returned on failure
            work (Callable[..., Any]): Unit of work taking the Nvim handle first
            fallback (Any, optional): Value carried by the error result

        Returns:
            EditorResult: The work's return value, or an error result
        """
        try:
            value = await asyncio.to_thread(self._with_connection, work, *args)
        except (EditorCommandError, ValidationError) as e:
            logger.error(f"Vim error: {e.message}")
            return EditorResult.failure(e.message, code=e.code, value=fallback)
        except Exception as e:
            error = e if isinstance(e, SessionError) else InternalError(str(e))
            logger.error(f"{failure_message}: {error}")
            logger.debug(traceback.format_exc())
            return EditorResult.failure(failure_message, code=error.code, value=fallback)
        return EditorResult.success(value)

    @staticmethod
    def _reject(error: SessionError) -> EditorResult:
        """Refuse a request without contacting Neovim."""
        logger.warning(f"Rejected request: {error.message}")
        return EditorResult.failure(error.message, code=error.code)

    # Buffer contents

    async def get_buffer_contents(self) -> EditorResult:
        """Read the active buffer; the fallback on failure is an empty mapping."""
        return await self._run(
            "Error getting buffer contents", self._read_buffer, fallback={}
        )

    @staticmethod
    def _read_buffer(nvim: Nvim) -> BufferContents:
        lines = nvim.current.buffer[:]
        return {number: line for number, line in enumerate(lines, start=1)}

    async def open_file(self, path: str) -> EditorResult:
        """Edit ``path`` in the current window and return its contents."""
        return await self._run(
            "Error opening file", self._open_file, path, fallback={}
        )

    def _open_file(self, nvim: Nvim, path: str) -> BufferContents:
        try:
            nvim.command(f"edit {nvim.call('fnameescape', path)}")
        except NvimError as e:
            raise EditorCommandError(f"Error opening file: {e}") from e
        return self._read_buffer(nvim)

    async def get_cwd(self) -> EditorResult:
        """Return the editor's working directory."""
        return await self._run(
            "Error getting working directory", lambda nvim: str(nvim.call("getcwd"))
        )

    # Commands

    async def send_command(self, command: str) -> EditorResult:
        """Run an Ex command or, when enabled, a ``!`` shell command.

        Leading colons and blanks are dropped. Shell commands are evaluated through
        Neovim's ``system()`` so the editor's cwd and environment apply; they
        are refused unless shell execution is enabled.
        """
        normalized = normalize_command(command)

        if normalized.startswith("!"):
            if not self.settings.allow_shell_commands:
                logger.info(f"Shell command refused: {normalized}")
                return EditorResult.success(SHELL_DISABLED_MESSAGE)
            return await self._run(
                "Error executing shell command",
                self._run_shell,
                normalized[1:].strip(),
            )

        return await self._run("Error executing command", self._run_command, normalized)

    @staticmethod
    def _run_shell(nvim: Nvim, shell_command: str) -> str:
        try:
            output = nvim.eval(f"system('{escape_single_quotes(shell_command)}')")
        except NvimError as e:
            raise EditorCommandError(f"Error executing shell command: {e}") from e
        output = str(output).strip() if output else ""
        return output or NO_OUTPUT

    @staticmethod
    def _run_command(nvim: Nvim, command: str) -> str:
        # execute() does not raise for every failure, v:errmsg is the reliable signal
        nvim.vvars["errmsg"] = ""
        try:
            output = nvim.call("execute", command)
        except NvimError as e:
            errmsg = nvim.vvars["errmsg"] or str(e)
            raise EditorCommandError(f"Error executing command: {errmsg}") from e

        errmsg = nvim.vvars["errmsg"]
        if errmsg:
            raise EditorCommandError(f"Error executing command: {errmsg}")

        output = str(output).strip() if output else ""
        return output or "Command executed (no output)"

    # Status

    async def get_status(self) -> EditorResult:
        """Collect cursor, mode, layout, marks, registers and cwd."""
        return await self._run("Error getting Neovim status", self._collect_status)

    def _collect_status(self, nvim: Nvim) -> EditorStatus:
        window = nvim.current.window
        buffer = nvim.current.buffer
        mode = nvim.api.get_mode()["mode"]

        visual_selection = ""
        if mode.startswith(VISUAL_MODES):
            visual_selection = self._visual_selection(nvim)

        line, col = window.cursor
        return EditorStatus(
            cursor_position=(line, col),
            mode=mode,
            visual_selection=visual_selection,
            file_name=buffer.name,
            window_layout=json.dumps(nvim.eval("winlayout()")),
            current_tab=nvim.current.tabpage.number,
            marks=self._collect_marks(nvim),
            registers=self._collect_registers(nvim),
            cwd=nvim.call("getcwd"),
        )

    @staticmethod
    def _collect_marks(nvim: Nvim) -> Dict[str, Tuple[int, int]]:
        marks: Dict[str, Tuple[int, int]] = {}
        for mark in MARK_NAMES:
            try:
                pos = nvim.eval(f"getpos(\"'{mark}\")")
            except NvimError:
                continue
            # [bufnum, lnum, col, off]; lnum 0 means unset
            if pos[1] == 0:
                continue
            marks[mark] = (pos[1], pos[2])
        return marks

    @staticmethod
    def _collect_registers(nvim: Nvim) -> Dict[str, str]:
        registers: Dict[str, str] = {}
        for register in STATUS_REGISTERS:
            try:
                content = nvim.call("getreg", register)
            except NvimError:
                continue
            if content:
                registers[register] = str(content)
        return registers

    @staticmethod
    def _visual_selection(nvim: Nvim) -> str:
        start = nvim.call("getpos", "v")
        end = nvim.call("getpos", ".")
        first, last = sorted((start[1], end[1]))
        return "\n".join(nvim.current.buffer[first - 1 : last])

    # Editing

    async def edit_lines(self, start_line: int, mode: str, text: str) -> EditorResult:
        """Insert or replace lines of the active buffer.

        Args:
            start_line (int): 1-based line to start at
            mode (str): ``insert`` before ``start_line``, ``replace`` from
                ``start_line`` to the end of the buffer, or ``replaceAll``
            text (str): New text, split on newlines

        Returns:
            EditorResult: Confirmation text, or ``"Error editing lines"``
        """
        if mode not in EDIT_MODES:
            return self._reject(
                ValidationError("Invalid mode specified", details={"mode": mode})
            )
        return await self._run(
            "Error editing lines", self._apply_edit, start_line, mode, text.split("\n")
        )

    @staticmethod
    def _apply_edit(nvim: Nvim, start_line: int, mode: str, lines: List[str]) -> str:
        buffer = nvim.current.buffer
        # Neovim's line API is 0-based and end-exclusive
        index = start_line - 1

        if mode == "replaceAll":
            buffer[:] = lines
            return "Buffer completely replaced"

        if mode == "replace":
            buffer[index:] = lines
            return "Lines replaced successfully"

        if len(buffer) == 1 and buffer[0] == "":
            # An empty buffer still holds one empty line
            buffer[:] = lines
        else:
            buffer[index:index] = lines
        return "Lines inserted successfully"

    # Windows

    async def get_windows(self) -> EditorResult:
        """List windows; the fallback on failure is an empty list."""
        return await self._run(
            "Error getting windows", self._collect_windows, fallback=[]
        )

    @staticmethod
    def _collect_windows(nvim: Nvim) -> List[WindowInfo]:
        return [
            WindowInfo(
                id=window.handle,
                buffer_id=window.buffer.handle,
                width=window.width,
                height=window.height,
                row=window.row,
                col=window.col,
            )
            for window in nvim.windows
        ]

    async def manipulate_window(self, command: str) -> EditorResult:
        """Run an allow-listed window command (split, close, wincmd h, ...)."""
        if not command.startswith(WINDOW_COMMANDS):
            return self._reject(
                ValidationError("Invalid window command", details={"command": command})
            )
        return await self._run(
            "Error executing window command", self._window_command, command
        )

    @staticmethod
    def _window_command(nvim: Nvim, command: str) -> str:
        nvim.command(command)
        return "Window command executed"

    # Marks, registers and selections

    async def set_mark(self, mark: str, line: int, col: int) -> EditorResult:
        """Set mark ``mark`` at (``line``, ``col``).

        The cursor is moved first because ``m{a-z}`` marks the cursor position.
        """
        if len(mark) != 1 or mark not in MARK_NAMES:
            return self._reject(
                ValidationError("Invalid mark name (must be a-z)", details={"mark": mark})
            )
        return await self._run("Error setting mark", self._place_mark, mark, line, col)

    @staticmethod
    def _place_mark(nvim: Nvim, mark: str, line: int, col: int) -> str:
        nvim.current.window.cursor = (line, col)
        nvim.command(f"normal! m{mark}")
        return f"Mark {mark} set at line {line}, column {col}"

    async def set_register(self, register: str, content: str) -> EditorResult:
        """Store ``content`` in a named register or the unnamed register."""
        if len(register) != 1 or register not in WRITABLE_REGISTERS:
            return self._reject(
                ValidationError("Invalid register name", details={"register": register})
            )
        return await self._run(
            "Error setting register", self._store_register, register, content
        )

    @staticmethod
    def _store_register(nvim: Nvim, register: str, content: str) -> str:
        nvim.eval(f"setreg('{register}', '{escape_single_quotes(content)}')")
        return f"Register {register} set"

    async def visual_select(
        self, start_line: int, start_col: int, end_line: int, end_col: int
    ) -> EditorResult:
        """Select from the start to the end position by walking the cursor.

        The shape of the selection is left to Neovim's visual mode.
        """
        return await self._run(
            "Error making visual selection",
            self._walk_selection,
            (start_line, start_col),
            (end_line, end_col),
        )

    @staticmethod
    def _walk_selection(
        nvim: Nvim, start: Tuple[int, int], end: Tuple[int, int]
    ) -> str:
        window = nvim.current.window
        window.cursor = start
        nvim.command("normal! v")
        window.cursor = end
        return "Visual selection made"

    # Buffers

    async def get_open_buffers(self) -> EditorResult:
        """List open buffers with the windows showing them."""
        return await self._run(
            "Error getting open buffers", self._collect_buffers, fallback=[]
        )

    def _collect_buffers(self, nvim: Nvim) -> List[BufferInfo]:
        windows = self._collect_windows(nvim)
        infos = []
        for buffer in nvim.buffers:
            handle = buffer.handle
            scope = {"buf": handle}
            infos.append(
                BufferInfo(
                    number=handle,
                    name=buffer.name,
                    is_listed=bool(nvim.api.get_option_value("buflisted", scope)),
                    is_loaded=bool(nvim.api.buf_is_loaded(buffer)),
                    modified=bool(nvim.api.get_option_value("modified", scope)),
                    syntax=str(nvim.api.get_option_value("syntax", scope)),
                    window_ids=[w.id for w in windows if w.buffer_id == handle],
                )
            )
        return infos
