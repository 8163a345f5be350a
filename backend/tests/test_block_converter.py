import pytest

from chat_markdown.services.block_converter import render_block_lines, render_plain_text
from chat_markdown.services.block_models import CodeBlock, HorizontalRule, StyledText, Table
from chat_markdown.services.markdown_parser import parse_markdown


def test_numbered_list_uses_positional_indices():
    (block,) = parse_markdown("5. foo\n9. bar")
    assert render_block_lines(block) == ["1. foo", "2. bar"]


def test_bullets_and_headers():
    blocks = parse_markdown("### Plan\n* **eat**\n- sleep")
    assert render_plain_text(blocks) == "### Plan\n\n• eat\n• sleep"


def test_code_block_is_fenced_verbatim():
    code = CodeBlock(language="py", code="x = **1**\n  y")
    assert render_block_lines(code) == ["```py", "x = **1**", "  y", "```"]
    assert render_block_lines(CodeBlock(code="")) == ["```", "```"]


def test_table_rows_rendered_unpadded():
    table = Table(headers=("A", "B"), rows=(("1",), ("2", "3", "4")))
    assert render_block_lines(table) == ["A | B", "1", "2 | 3 | 4"]


def test_blockquote_lines():
    (quote,) = parse_markdown("> one\n>\n> two")
    assert render_block_lines(quote) == ["> one", ">", "> two"]


def test_rule():
    assert render_block_lines(HorizontalRule()) == ["---"]


def test_unknown_block_raises():
    with pytest.raises(TypeError):
        render_block_lines(StyledText.plain("not a block"))
