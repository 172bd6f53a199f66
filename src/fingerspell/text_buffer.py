"""
Typed text sink.
"""


class TextBuffer:
    """Append-only text with a few manual edits."""

    def __init__(self, text: str = ""):
        self._text = text

    @property
    def text(self) -> str:
        return self._text

    def __str__(self) -> str:
        return self._text

    def __len__(self) -> int:
        return len(self._text)

    def ends_with_space(self) -> bool:
        return self._text.endswith(" ")

    def append(self, symbol: str) -> None:
        self._text += symbol

    def append_word(self, word: str) -> None:
        """Append a whole word with a single space on either side."""
        if self._text and not self.ends_with_space():
            self._text += " "
        self._text += word + " "

    def space(self) -> None:
        self._text += " "

    def backspace(self) -> None:
        self._text = self._text[:-1]

    def clear(self) -> None:
        self._text = ""
