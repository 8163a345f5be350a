"""Inline markdown → StyledText.

Single left-to-right scan, no nesting. Recognized spans, in precedence order at
any position: backslash escapes, `code`, [label](url), ***bold italic***,
**bold**, ~~strike~~, *italic* / _italic_. Anything that does not close is kept
as literal text, so unbalanced markup degrades to an unstyled run instead of
failing.

Closer validity never depends on where the opener sits, so once a forward
search for a delimiter (or backtick width, or ``]``) comes up empty, every
later opener of that kind is declined without searching again. Link
parentheses are paired once for the whole text. That keeps the scan linear on
text full of unclosed markers.
"""

from __future__ import annotations

import string

from .block_models import InlineStyle, StyledText, TextRun

_ESCAPABLE = frozenset(string.punctuation)

_BOLD = frozenset({"bold"})
_BOLD_ITALIC = frozenset({"bold", "italic"})
_ITALIC = frozenset({"italic"})
_STRIKE = frozenset({"strikethrough"})
_CODE = frozenset({"code"})
_LINK = frozenset({"link"})


def format_inline(text: str) -> StyledText:
    """Parse inline formatting in ``text``. Whitespace is preserved as-is."""
    if not text:
        return StyledText()
    return StyledText(runs=tuple(_merge_runs(_InlineScanner(text).scan())))


class _InlineScanner:
    def __init__(self, text: str) -> None:
        self.text = text
        # Delimiters / backtick widths with no valid closer left in the text
        self.exhausted_delims: set[str] = set()
        self.exhausted_ticks: set[int] = set()
        # (searched_from, index of first ']' at or after it, -1 for none)
        self._bracket: tuple[int, int] = (-1, -1)
        # '(' index -> index of its balancing ')', built on first use
        self._paren_match: dict[int, int] | None = None

    def scan(self) -> list[TextRun]:
        text = self.text
        runs: list[TextRun] = []
        buf: list[str] = []

        def emit(run: TextRun) -> None:
            if buf:
                runs.append(TextRun(text="".join(buf)))
                buf.clear()
            runs.append(run)

        pos = 0
        n = len(text)
        while pos < n:
            ch = text[pos]

            if ch == "\\" and pos + 1 < n and text[pos + 1] in _ESCAPABLE:
                buf.append(text[pos + 1])
                pos += 2
                continue

            if ch == "`":
                run, end = self._code_span(pos)
                if run is None:
                    # Unmatched backtick string stays literal as a whole
                    buf.append(text[pos:end])
                else:
                    emit(run)
                pos = end
                continue

            if ch == "[":
                run, end = self._link(pos)
                if run is not None:
                    emit(run)
                    pos = end
                    continue

            if text.startswith("***", pos):
                run, end = self._delimited(pos, "***", _BOLD_ITALIC)
                if run is None:
                    buf.append("***")
                    pos += 3
                else:
                    emit(run)
                    pos = end
                continue

            if text.startswith("**", pos):
                run, end = self._delimited(pos, "**", _BOLD)
                if run is not None:
                    emit(run)
                    pos = end
                    continue
                # Let the second '*' try to open an italic span
                buf.append("*")
                pos += 1
                continue

            if text.startswith("~~", pos):
                run, end = self._delimited(pos, "~~", _STRIKE)
                if run is not None:
                    emit(run)
                    pos = end
                    continue
                buf.append("~~")
                pos += 2
                continue

            if ch in ("*", "_"):
                run, end = self._delimited(pos, ch, _ITALIC)
                if run is not None:
                    emit(run)
                    pos = end
                    continue

            buf.append(ch)
            pos += 1

        if buf:
            runs.append(TextRun(text="".join(buf)))
        return runs

    def _code_span(self, pos: int) -> tuple[TextRun | None, int]:
        """Match a code span opened by a run of N backticks and closed by exactly N."""
        text = self.text
        n = len(text)
        ticks_end = pos
        while ticks_end < n and text[ticks_end] == "`":
            ticks_end += 1
        width = ticks_end - pos
        if width in self.exhausted_ticks:
            return None, ticks_end

        search = ticks_end
        while True:
            close = text.find("`", search)
            if close == -1:
                self.exhausted_ticks.add(width)
                return None, ticks_end
            close_end = close
            while close_end < n and text[close_end] == "`":
                close_end += 1
            if close_end - close == width:
                content = text[ticks_end:close]
                if len(content) > 2 and content.startswith(" ") and content.endswith(" ") and content.strip():
                    content = content[1:-1]
                return TextRun(text=content, styles=_CODE), close_end
            search = close_end

    def _close_bracket(self, start: int) -> int:
        searched_from, found = self._bracket
        if searched_from == -1 or start < searched_from or (found != -1 and found < start):
            found = self.text.find("]", start)
            self._bracket = (start, found)
        return found

    def _destination_end(self, close: int) -> int:
        """Index of the ')' balancing the '(' right after ``close``, -1 for none."""
        if self._paren_match is None:
            # One pass pairing every unescaped '(' with its ')'
            self._paren_match = {}
            stack: list[int] = []
            for idx, c in enumerate(self.text):
                if idx > 0 and self.text[idx - 1] == "\\":
                    continue
                if c == "(":
                    stack.append(idx)
                elif c == ")" and stack:
                    self._paren_match[stack.pop()] = idx
        return self._paren_match.get(close + 1, -1)

    def _link(self, pos: int) -> tuple[TextRun | None, int]:
        text = self.text
        close = self._close_bracket(pos + 1)
        if close == -1 or close + 1 >= len(text) or text[close + 1] != "(":
            return None, pos
        end = self._destination_end(close)
        if end == -1:
            return None, pos
        label = text[pos + 1 : close]
        target = text[close + 2 : end].strip()
        if not label or not target:
            return None, pos
        # Drop an optional title: [label](url "title")
        url = target.split()[0].strip("<>")
        if not url:
            return None, pos
        return TextRun(text=label, styles=_LINK, url=url), end + 1

    def _delimited(self, pos: int, delim: str, styles: frozenset[InlineStyle]) -> tuple[TextRun | None, int]:
        """Match ``delim content delim`` starting at ``pos``.

        The opener must be followed by non-whitespace and the closer preceded by
        non-whitespace. ``_`` does not open or close inside a word.
        """
        text = self.text
        n = len(text)
        width = len(delim)
        start = pos + width
        if start >= n or text[start].isspace():
            return None, pos
        if delim == "_" and pos > 0 and text[pos - 1].isalnum():
            return None, pos
        if delim in self.exhausted_delims:
            return None, pos

        search = start + 1
        while True:
            close = text.find(delim, search)
            if close == -1:
                self.exhausted_delims.add(delim)
                return None, pos
            search = close + 1
            if text[close - 1].isspace():
                continue
            if width == 1:
                # A single delimiter never closes on half of a doubled one
                if text[close - 1] == delim or (close + 1 < n and text[close + 1] == delim):
                    continue
                if delim == "_" and close + 1 < n and text[close + 1].isalnum():
                    continue
            return TextRun(text=text[start:close], styles=styles), close + width


def _merge_runs(runs: list[TextRun]) -> list[TextRun]:
    merged: list[TextRun] = []
    for run in runs:
        if not run.text:
            continue
        if merged and merged[-1].styles == run.styles and merged[-1].url == run.url:
            prev = merged.pop()
            run = TextRun(text=prev.text + run.text, styles=run.styles, url=run.url)
        merged.append(run)
    return merged
