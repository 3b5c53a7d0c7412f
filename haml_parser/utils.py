"""Small scanning helpers shared by the line grammars."""

from __future__ import annotations


def balance(text: str, start: str, finish: str, depth: int = 1) -> tuple[str, str, int]:
    """Scan *text* until the bracket opened before it is closed.

    *depth* is the number of ``start`` characters already open.  Returns
    ``(prefix, rest, depth)``: ``prefix`` is everything before the closing
    character, ``rest`` everything after it.  When the brackets never balance
    the whole text is returned as ``prefix`` along with the remaining depth.
    """
    for pos, ch in enumerate(text):
        if ch == start:
            depth += 1
        elif ch == finish:
            depth -= 1
            if depth == 0:
                return text[:pos], text[pos + 1:], 0
    return text, "", depth
