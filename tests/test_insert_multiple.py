"""Tests for VimInsertMultipleHandler."""

import pytest

from mcp_neovim_server.handlers import VimInsertMultipleHandler
from mcp_neovim_server.handlers.vim_insert_multiple import FORMAT_COMMAND


@pytest.fixture
def handler(session):
    """Create handler instance."""
    return VimInsertMultipleHandler(session)


@pytest.mark.asyncio
async def test_inserts_into_empty_buffer_in_order(handler, nvim):
    """Both blocks target line 1 of the original buffer and keep their order."""
    nvim.buffer.lines = [""]

    result = await handler.run_tool(
        {"inserts": [{"startLine": 1, "content": "a"}, {"startLine": 1, "content": "b"}]}
    )

    assert nvim.buffer.lines == ["a", "b"]
    assert result[0].text == "1: a\n2: b"


@pytest.mark.asyncio
async def test_offsets_follow_original_line_numbers(handler, nvim):
    result = await handler.run_tool(
        {
            "inserts": [
                {"startLine": 1, "content": "# header\n# second"},
                {"startLine": 3, "content": "before line3"},
            ]
        }
    )

    assert nvim.buffer.lines == [
        "# header",
        "# second",
        "line1",
        "line2",
        "before line3",
        "line3",
    ]
    assert result[0].text.splitlines()[4] == "5: before line3"


@pytest.mark.asyncio
async def test_unsorted_blocks_land_at_original_lines(handler, nvim):
    await handler.run_tool(
        {"inserts": [{"startLine": 3, "content": "x"}, {"startLine": 1, "content": "y"}]}
    )
    assert nvim.buffer.lines == ["y", "line1", "line2", "x", "line3"]


@pytest.mark.asyncio
async def test_blocks_sharing_a_line_keep_request_order(handler, nvim):
    await handler.run_tool(
        {
            "inserts": [
                {"startLine": 2, "content": "b"},
                {"startLine": 1, "content": "a"},
                {"startLine": 2, "content": "c"},
            ]
        }
    )
    assert nvim.buffer.lines == ["a", "line1", "b", "c", "line2", "line3"]


@pytest.mark.asyncio
async def test_error_names_block_by_request_position(handler, nvim):
    result = await handler.run_tool(
        {"inserts": [{"startLine": 50, "content": "x"}, {"startLine": 1, "content": "y"}]}
    )
    assert result[0].text == "Error inserting block 1 at line 50: Error editing lines"
    assert nvim.buffer.lines == ["y", "line1", "line2", "line3"]


@pytest.mark.asyncio
async def test_runs_format_pass(handler, nvim):
    await handler.run_tool({"inserts": [{"startLine": 2, "content": "x"}]})
    assert nvim.executed == [FORMAT_COMMAND]


@pytest.mark.asyncio
async def test_format_failure_still_returns_buffer(handler, nvim):
    nvim.command_errors[FORMAT_COMMAND] = "E5555: formatter failed"
    result = await handler.run_tool({"inserts": [{"startLine": 1, "content": "x"}]})
    assert result[0].text.startswith("1: x\n")


@pytest.mark.asyncio
async def test_stops_at_failing_block(handler, nvim):
    result = await handler.run_tool(
        {
            "inserts": [
                {"startLine": 1, "content": "ok"},
                {"startLine": 50, "content": "out of range"},
                {"startLine": 60, "content": "never"},
            ]
        }
    )

    assert result[0].text == (
        "Error inserting block 2 at line 50: Error editing lines"
    )
    assert nvim.buffer.lines == ["ok", "line1", "line2", "line3"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "arguments",
    [
        {"inserts": []},
        {"inserts": [{"startLine": 0, "content": "x"}]},
        {"inserts": [{"content": "x"}]},
    ],
)
async def test_invalid_arguments_rejected_before_editing(handler, attach, arguments):
    with pytest.raises(RuntimeError):
        await handler.run_tool(arguments)
    attach.assert_not_called()


@pytest.mark.asyncio
async def test_missing_inserts(handler):
    with pytest.raises(RuntimeError, match="Missing required argument: inserts"):
        await handler.run_tool({})
