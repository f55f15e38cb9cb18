from __future__ import annotations

import typing as t
from dataclasses import dataclass

LINE = "line"
BLOCK = "block"
TERMINATOR = ";"


@dataclass(frozen=True)
class Comment:
    kind: str
    text: str

    def render(self) -> str:
        if self.kind == LINE:
            return "//" + self.text + "\n"
        return "/*" + self.text + "*/\n"


def render_comments(comments: t.Iterable[Comment]) -> str:
    return "".join(c.render() for c in comments)


def assemble(
    code: str,
    comments: t.Sequence[Comment],
    max_line_length: t.Optional[int],
    split_lines: t.Callable[[str, int], str],
) -> str:
    """Build the final artifact from engine output.

    Leading comments come first in their original order. When ``max_line_length`` is
    positive the text goes through ``split_lines``, which must only break between tokens.
    One terminator is always appended.
    """
    text = render_comments(comments) + (code or "")
    if max_line_length and max_line_length > 0:
        text = split_lines(text, max_line_length)
    return text + TERMINATOR
