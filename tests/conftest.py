"""Test configuration and fixtures."""

import re
from typing import Any, Dict, List, Optional

import pytest
from pynvim.api import NvimError

from mcp_neovim_server.config import Settings
from mcp_neovim_server.neovim import NeovimSession

TEST_SOCKET = "/tmp/test-nvim.sock"


class FakeBuffer:
    """In-memory stand-in for pynvim.api.Buffer."""

    def __init__(self, handle: int = 1, name: str = "", lines: Optional[List[str]] = None):
        self.handle = handle
        self.number = handle
        self.name = name
        self.lines = list(lines) if lines is not None else [""]
        self.options: Dict[str, Any] = {
            "buflisted": True,
            "modified": False,
            "syntax": "",
        }
        self.loaded = True

    def __len__(self) -> int:
        return len(self.lines)

    def __getitem__(self, idx):
        if isinstance(idx, slice):
            return self.lines[idx]
        return self.lines[idx]

    def __setitem__(self, idx, lines):
        if not isinstance(idx, slice):
            self.lines[idx] = lines
            return
        start = 0 if idx.start is None else idx.start
        if start > len(self.lines):
            raise NvimError("Index out of bounds")
        self.lines[idx] = list(lines)
        if not self.lines:
            # Neovim never holds zero lines
            self.lines = [""]


class FakeWindow:
    """In-memory stand-in for pynvim.api.Window."""

    def __init__(self, handle: int, buffer: FakeBuffer, width=80, height=24, row=0, col=0):
        self.handle = handle
        self.buffer = buffer
        self.width = width
        self.height = height
        self.row = row
        self.col = col
        self.cursor_moves: List[tuple] = []
        self._cursor = (1, 0)

    @property
    def cursor(self):
        return self._cursor

    @cursor.setter
    def cursor(self, value):
        self._cursor = tuple(value)
        self.cursor_moves.append(tuple(value))


class FakeTabpage:
    def __init__(self, number: int = 1):
        self.number = number


class FakeCurrent:
    def __init__(self, nvim: "FakeNvim"):
        self._nvim = nvim

    @property
    def buffer(self) -> FakeBuffer:
        return self._nvim.current_window.buffer

    @property
    def window(self) -> FakeWindow:
        return self._nvim.current_window

    @property
    def tabpage(self) -> FakeTabpage:
        return self._nvim.tabpage


class FakeApi:
    def __init__(self, nvim: "FakeNvim"):
        self._nvim = nvim

    def get_mode(self) -> Dict[str, Any]:
        return {"mode": self._nvim.mode, "blocking": False}

    def get_option_value(self, name: str, opts: Dict[str, Any]) -> Any:
        return self._nvim.buffer_by_handle(opts["buf"]).options[name]

    def buf_is_loaded(self, buffer: FakeBuffer) -> bool:
        return buffer.loaded


class FakeNvim:
    """In-memory stand-in for the handle returned by pynvim.attach()."""

    def __init__(self, lines: Optional[List[str]] = None):
        first = FakeBuffer(1, "/work/main.py", lines)
        self.buffers: List[FakeBuffer] = [first]
        self.windows: List[FakeWindow] = [FakeWindow(1000, first)]
        self.current_window = self.windows[0]
        self.current = FakeCurrent(self)
        self.api = FakeApi(self)
        self.tabpage = FakeTabpage()
        self.mode = "n"
        self.cwd = "/work"
        self.vvars: Dict[str, Any] = {"errmsg": ""}
        self.marks: Dict[str, tuple] = {}
        self.failing_marks: set = set()
        self.registers: Dict[str, str] = {}
        self.visual_start = [0, 1, 1, 0]
        self.files: Dict[str, List[str]] = {}
        self.command_output: Dict[str, str] = {}
        self.command_errors: Dict[str, str] = {}
        self.shell_output = ""
        self.commands: List[str] = []
        self.evals: List[str] = []
        self.executed: List[str] = []
        self.closed = 0

    @property
    def buffer(self) -> FakeBuffer:
        return self.current_window.buffer

    def buffer_by_handle(self, handle: int) -> FakeBuffer:
        return next(b for b in self.buffers if b.handle == handle)

    def add_buffer(self, name: str, lines: Optional[List[str]] = None) -> FakeBuffer:
        buffer = FakeBuffer(len(self.buffers) + 1, name, lines)
        self.buffers.append(buffer)
        return buffer

    def close(self) -> None:
        self.closed += 1

    def command(self, command: str) -> None:
        self.commands.append(command)
        if command.startswith("edit "):
            path = command[len("edit "):].replace("\\ ", " ")
            if path not in self.files:
                raise NvimError(f"E484: Can't open file {path}")
            buffer = self.add_buffer(path, self.files[path])
            self.current_window.buffer = buffer
        elif command.startswith("normal! m"):
            line, col = self.current_window.cursor
            self.marks[command[-1]] = (line, col + 1)
        elif command == "normal! v":
            self.mode = "v"
            line, col = self.current_window.cursor
            self.visual_start = [0, line, col + 1, 0]

    def call(self, name: str, *args: Any) -> Any:
        if name == "execute":
            command = args[0]
            self.executed.append(command)
            if command in self.command_errors:
                self.vvars["errmsg"] = self.command_errors[command]
                return ""
            return self.command_output.get(command, "")
        if name == "getcwd":
            return self.cwd
        if name == "getreg":
            return self.registers.get(args[0], "")
        if name == "fnameescape":
            return args[0].replace(" ", "\\ ")
        if name == "getpos":
            if args[0] == "v":
                return self.visual_start
            line, col = self.current_window.cursor
            return [0, line, col + 1, 0]
        raise NvimError(f"Unknown function: {name}")

    def eval(self, expr: str) -> Any:
        self.evals.append(expr)
        if expr == "winlayout()":
            return ["leaf", self.current_window.handle]
        match = re.fullmatch(r"getpos\(\"'([a-z])\"\)", expr)
        if match:
            mark = match.group(1)
            if mark in self.failing_marks:
                raise NvimError(f"E20: Mark not set: {mark}")
            if mark not in self.marks:
                return [0, 0, 0, 0]
            line, col = self.marks[mark]
            return [0, line, col, 0]
        match = re.fullmatch(r"setreg\('(.)', '(.*)'\)", expr, re.DOTALL)
        if match:
            self.registers[match.group(1)] = match.group(2).replace("''", "'")
            return 0
        if expr.startswith("system("):
            return self.shell_output
        raise NvimError(f"E121: Undefined variable: {expr}")


@pytest.fixture
def nvim() -> FakeNvim:
    """Fake Neovim with a three line buffer."""
    return FakeNvim(["line1", "line2", "line3"])


@pytest.fixture
def attach(mocker, nvim):
    """Patch pynvim.attach to hand out the fake Neovim."""
    return mocker.patch("pynvim.attach", return_value=nvim)


@pytest.fixture
def settings() -> Settings:
    return Settings(socket_path=TEST_SOCKET)


@pytest.fixture
def session(attach, settings) -> NeovimSession:
    """Session with shell commands disabled."""
    return NeovimSession(settings)


@pytest.fixture
def shell_session(attach) -> NeovimSession:
    """Session with shell commands enabled."""
    return NeovimSession(Settings(socket_path=TEST_SOCKET, allow_shell_commands=True))


@pytest.fixture
def broken_session(mocker, settings) -> NeovimSession:
    """Session whose socket cannot be attached."""
    mocker.patch("pynvim.attach", side_effect=OSError("No such file or directory"))
    return NeovimSession(settings)
