import re
import unicodedata
from typing import List

_MATH_DELIM_RE = re.compile(r'(?<!\\)(\$\$|\$)')  # matches unescaped $ or $$


def _strip_combining(text: str) -> str:
    text = unicodedata.normalize('NFC', text)
    return ''.join(ch for ch in text if unicodedata.category(ch) != 'Mn')


def latex_escape(text: str) -> str:
    """Escape LaTeX special characters in plain text."""
    text = _strip_combining(text)
    repl = {
        '\\': r'\textbackslash{}',
        '&':  r'\&',
        '%':  r'\%',
        '#':  r'\#',
        '_':  r'\_',
        '{':  r'\{',
        '}':  r'\}',
        '~':  r'\textasciitilde{}',
        '^':  r'\textasciicircum{}',
        '$':  r'\$',
    }
    return ''.join(repl.get(c, c) for c in text)


def latex_escape_keep_math(s: str) -> str:
    """Escape text outside ``$...$`` / ``$$...$$`` and keep math segments verbatim."""
    parts: List[str] = []
    pos = 0
    in_math = False
    current_delim = None

    for m in _MATH_DELIM_RE.finditer(s):
        delim = m.group(1)
        start, end = m.span()
        chunk = s[pos:start]
        parts.append(chunk if in_math else latex_escape(chunk))
        parts.append(delim)
        if not in_math:
            in_math = True
            current_delim = delim
        elif delim == current_delim:
            in_math = False
            current_delim = None
        pos = end

    tail = s[pos:]
    parts.append(tail if in_math else latex_escape(tail))
    return ''.join(parts)
