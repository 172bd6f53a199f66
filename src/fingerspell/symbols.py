"""
Symbols produced by the classifier besides plain letters.
"""

NO_SYMBOL = ""             # No confident match / malformed input
OPEN_HAND = "OPEN_HAND"
FIST = "FIST"
NO_HAND = "NO_HAND"        # Nothing detected this frame

# Never typed; seeing one resets the commit marker
NEUTRAL_SYMBOLS = frozenset({NO_SYMBOL, OPEN_HAND, FIST, NO_HAND})

_LABELS = {
    NO_SYMBOL: "...",
    OPEN_HAND: "Open hand",
    FIST: "Fist",
    NO_HAND: "Show hand",
}


def is_neutral(symbol: str) -> bool:
    return symbol in NEUTRAL_SYMBOLS


def display_label(symbol: str) -> str:
    """Human-readable status text for a raw or smoothed symbol."""
    return _LABELS.get(symbol, symbol)
