from __future__ import annotations

LINE_TERMINATOR = "\n"


def split_lines(text: str) -> list[str]:
    r"""Split a text blob into the line sequence the diff operates on.

    - ``\r\n`` terminators are normalized to ``\n`` before splitting.
    - Exactly one trailing empty element is dropped when the text ends with
      a terminator, so ``"a\nb\n"`` gives ``["a", "b"]``.
    - The empty string is an empty sequence, not one empty line.
    """
    if not text:
        return []
    lines = text.replace("\r\n", LINE_TERMINATOR).split(LINE_TERMINATOR)
    if lines[-1] == "":
        lines.pop()
    return lines


def clamp_line(s: str, max_chars: int | None) -> str:
    """Cap a display line at max_chars, marking the cut with an ellipsis."""
    if max_chars and len(s) > max_chars:
        return s[:max_chars] + " …"
    return s
