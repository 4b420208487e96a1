"""
Key tokens shared by the views.

Raw terminal input is normalised to these names by :func:`normalize_key`;
single printable characters are passed through as themselves.
"""

UP = "up"
DOWN = "down"
LEFT = "left"
RIGHT = "right"
ENTER = "enter"
ESC = "esc"
BACKSPACE = "backspace"
CTRL_C = "ctrl+c"

_SEQUENCES = {
    "\x1b[A": UP, "\x1bOA": UP, "\xe0H": UP, "\x00H": UP,
    "\x1b[B": DOWN, "\x1bOB": DOWN, "\xe0P": DOWN, "\x00P": DOWN,
    "\x1b[C": RIGHT, "\x1bOC": RIGHT, "\xe0M": RIGHT, "\x00M": RIGHT,
    "\x1b[D": LEFT, "\x1bOD": LEFT, "\xe0K": LEFT, "\x00K": LEFT,
    "\r": ENTER, "\n": ENTER, "\r\n": ENTER,
    "\x1b": ESC,
    "\x7f": BACKSPACE, "\x08": BACKSPACE,
    "\x03": CTRL_C,
}


def normalize_key(raw: str) -> str:
    """
    Translate raw input into a key token.

    Unknown multi-character sequences come back unchanged so that callers
    treat them as non-printable and ignore them.
    """
    return _SEQUENCES.get(raw, raw)


def is_printable(key: str) -> bool:
    return len(key) == 1 and key.isprintable()
