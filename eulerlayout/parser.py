"""Parser for the informal description syntax.

``"a b ab"`` lists the non-outside zones of a description; every character of
a token is one label.  ``#`` starts a comment that runs to the end of the line.
"""

from __future__ import annotations

import logging
import re
from typing import List, Tuple

from .abstract import AbstractZone, Description, OUTSIDE
from .errors import DescriptionSyntaxError

logger = logging.getLogger(__name__)

Token = Tuple[str, int, int]  # (text, line, col)

WS = " \t\r"

_token_re = re.compile(r"[A-Za-z0-9]+")
_ERROR_LOC_RE = re.compile(r"\[line (\d+), col (\d+)\]")


def tokenize_line(s: str, line_no: int) -> List[Token]:
    tokens: List[Token] = []
    i = 0
    n = len(s)
    while i < n:
        ch = s[i]
        col = i + 1
        if ch == "#":
            break
        if ch in WS:
            i += 1
            continue
        m = _token_re.match(s, i)
        if m:
            tokens.append((m.group(0), line_no, col))
            i = m.end()
            continue
        raise DescriptionSyntaxError(
            f"[line {line_no}, col {col}] unexpected character: {ch!r}", line_no, col
        )
    return tokens


def _zone_from_token(token: Token) -> AbstractZone:
    text, line_no, col = token
    seen = set()
    for offset, ch in enumerate(text):
        if ch in seen:
            raise DescriptionSyntaxError(
                f"[line {line_no}, col {col + offset}] label {ch!r} repeated in zone {text!r}",
                line_no,
                col + offset,
            )
        seen.add(ch)
    return AbstractZone.from_informal(text)


def _augment_syntax_error(err: DescriptionSyntaxError, line_text: str) -> DescriptionSyntaxError:
    message = str(err)
    if not line_text or "\n" in message or not _ERROR_LOC_RE.search(message):
        return err
    caret_line = " " * (max(err.col, 1) - 1) + "^"
    snippet = f"    {line_text.rstrip()}\n    {caret_line}"
    return DescriptionSyntaxError(f"{message}\n{snippet}", err.line, err.col)


def parse_description(text: str, parent: AbstractZone = OUTSIDE) -> Description:
    """Parse ``text`` into a :class:`Description` (the outside zone is implicit)."""

    zones = [OUTSIDE]
    for i, raw in enumerate(text.splitlines(), start=1):
        try:
            tokens = tokenize_line(raw, i)
            zones.extend(_zone_from_token(token) for token in tokens)
        except DescriptionSyntaxError as err:
            raise _augment_syntax_error(err, raw) from None
    description = Description(zones, parent)
    logger.debug(
        "Parsed description with %d zone(s) over labels %s",
        len(description) - 1,
        ",".join(description.labels),
    )
    return description


__all__ = ["parse_description", "tokenize_line"]
