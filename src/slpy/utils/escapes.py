"""
String literal escapes.

Lexing keeps a literal's raw text; decoding happens when the parser
consumes it, and the pretty-printer re-encodes on the way back out.
"""

from .config import ESCAPE_CHAR, ESCAPE_SEQUENCES

_REVERSE_ESCAPES = {actual: ESCAPE_CHAR + letter for letter, actual in ESCAPE_SEQUENCES.items()}


def de_escape(raw: str) -> str:
    """Replace `\\n`, `\\t`, `\\\\` and `\\"` with the characters they stand for.

    An unknown escape (backslash then any other character) is dropped.
    """
    out = []
    escaping = False
    for ch in raw:
        if escaping:
            if ch in ESCAPE_SEQUENCES:
                out.append(ESCAPE_SEQUENCES[ch])
            escaping = False
        elif ch == ESCAPE_CHAR:
            escaping = True
        else:
            out.append(ch)
    return "".join(out)


def re_escape(text: str) -> str:
    """Inverse of de_escape: newline, tab, backslash and quote become escapes."""
    return "".join(_REVERSE_ESCAPES.get(ch, ch) for ch in text)
