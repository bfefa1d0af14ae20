"""Data models for the MCP Neovim Server."""

from typing import Any, Dict, List, Literal, Optional, Tuple, get_args

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from .errors import ErrorCode

EditMode = Literal["insert", "replace", "replaceAll"]
WindowCommand = Literal[
    "split",
    "vsplit",
    "only",
    "close",
    "wincmd h",
    "wincmd j",
    "wincmd k",
    "wincmd l",
]
WINDOW_COMMANDS: Tuple[str, ...] = get_args(WindowCommand)

# Line number -> line text, 1-based and contiguous
BufferContents = Dict[int, str]


class CamelModel(BaseModel):
    """Base model serialised with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the model to a JSON-ready dictionary."""
        return self.model_dump(by_alias=True, mode="json")


class EditorStatus(CamelModel):
    """Snapshot of the editor state."""

    cursor_position: Tuple[int, int] = Field(..., description="Cursor (line, column)")
    mode: str = Field(..., description="Current mode identifier")
    visual_selection: str = Field(
        "", description="Selected text, empty outside visual modes"
    )
    file_name: str = Field(..., description="Name of the active buffer")
    window_layout: str = Field(..., description="JSON of winlayout()")
    current_tab: int = Field(..., description="Active tab page number")
    marks: Dict[str, Tuple[int, int]] = Field(
        default_factory=dict, description="Set marks only"
    )
    registers: Dict[str, str] = Field(
        default_factory=dict, description="Registers with content only"
    )
    cwd: str = Field(..., description="Current working directory")


class BufferInfo(CamelModel):
    """One open buffer."""

    number: int = Field(..., description="Buffer handle")
    name: str = Field(..., description="Buffer name or path")
    is_listed: bool
    is_loaded: bool
    modified: bool
    syntax: str
    window_ids: List[int] = Field(
        default_factory=list, description="Windows currently displaying the buffer"
    )


class WindowInfo(CamelModel):
    """One editor window."""

    id: int
    buffer_id: int
    width: int
    height: int
    row: int
    col: int


class EditorResult(BaseModel):
    """Outcome of a session operation.

    ``value`` holds the payload on success and the fallback value (empty
    mapping, empty list, ...) on error, so callers that only need the data can
    ignore the distinction while the router can still report the failure.
    """

    result: Literal["ok", "error"] = Field(..., description="Operation result")
    value: Any = Field(None, description="Payload or fallback value")
    reason: Optional[str] = Field(None, description="Error message if applicable")
    code: Optional[ErrorCode] = Field(None, description="Error code if applicable")

    @model_validator(mode="after")
    def validate_error_result(self) -> "EditorResult":
        """Require a reason on errors."""
        if self.result == "error" and not self.reason:
            raise ValueError("reason is required for error results")
        return self

    @classmethod
    def success(cls, value: Any = None) -> "EditorResult":
        return cls(result="ok", value=value)

    @classmethod
    def failure(
        cls,
        reason: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        value: Any = None,
    ) -> "EditorResult":
        return cls(result="error", reason=reason, code=code, value=value)

    @property
    def ok(self) -> bool:
        return self.result == "ok"

    @property
    def text(self) -> str:
        """Text shown to the caller: the value on success, the reason on error."""
        if self.ok:
            return "" if self.value is None else str(self.value)
        return self.reason or ""

    def to_dict(self) -> Dict[str, Any]:
        """Convert EditorResult to a JSON-ready dictionary, payload included."""
        return self.model_dump(by_alias=True, mode="json", exclude_none=True)


class CommandRequest(BaseModel):
    """Request model for vim_command."""

    command: str = Field(..., min_length=1, description="Command to run")


class EditLinesRequest(CamelModel):
    """Request model for vim_edit.

    Example:
    {
        "startLine": 5,
        "mode": "replace",
        "lines": "first\\nsecond"
    }
    """

    start_line: int = Field(..., ge=1, description="Line number to start editing")
    mode: EditMode = Field(..., description="insert, replace or replaceAll")
    lines: str = Field(..., description="Text to insert or replace with")


class WindowCommandRequest(BaseModel):
    """Request model for vim_window."""

    command: str = Field(..., description="Window command")


class SetMarkRequest(BaseModel):
    """Request model for vim_mark."""

    mark: str = Field(..., pattern=r"^[a-z]$", description="Mark name (a-z)")
    line: int = Field(..., ge=1, description="Line number (1-based)")
    column: int = Field(..., ge=0, description="Column number (0-based)")


class SetRegisterRequest(BaseModel):
    """Request model for vim_register.

    The register name is stored as ``name`` because ``register`` is taken by
    the ABC machinery on BaseModel.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(
        ..., alias="register", pattern=r'^[a-z"]$', description='Register (a-z or ")'
    )
    content: str = Field(..., description="Content to store")


class VisualSelectRequest(CamelModel):
    """Request model for vim_visual."""

    start_line: int = Field(..., ge=1)
    start_column: int = Field(..., ge=0)
    end_line: int = Field(..., ge=1)
    end_column: int = Field(..., ge=0)


class OpenFileRequest(BaseModel):
    """Request model for vim_open."""

    path: str = Field(..., min_length=1, description="File to open")


class FindFileRequest(BaseModel):
    """Request model for vim_find_file."""

    filename: str = Field(..., min_length=1, description="File name to search for")


class InsertEntry(CamelModel):
    """A single block of vim_insert_multiple."""

    start_line: int = Field(
        ..., ge=1, description="Line in the original buffer to insert before"
    )
    content: str = Field(..., description="Text to insert")


class InsertMultipleRequest(BaseModel):
    """Request model for vim_insert_multiple.

    Example:
    {
        "inserts": [
            {"startLine": 1, "content": "import os"},
            {"startLine": 10, "content": "def main():\\n    pass"}
        ]
    }
    """

    inserts: List[InsertEntry] = Field(..., min_length=1)
