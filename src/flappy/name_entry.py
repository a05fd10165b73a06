"""
name_entry.py: Non-blocking initials entry shown after a game ends.
"""

from typing import Optional

from .constants import INITIALS_LENGTH


class NameEntry:
    """
    Collects up to three letters one key at a time. The game keeps running
    its loop while this is open; nothing waits on it.
    """

    def __init__(self, length: int = INITIALS_LENGTH):
        self.length = length
        self.active = False
        self.text = ""
        self.score = 0

    def open(self, score: int):
        self.active = True
        self.text = ""
        self.score = score

    def cancel(self):
        self.active = False
        self.text = ""

    def type_char(self, char: str):
        if not self.active or len(char) != 1 or not char.isalpha():
            return
        if len(self.text) < self.length:
            self.text += char.upper()

    def backspace(self):
        if self.active:
            self.text = self.text[:-1]

    def confirm(self) -> Optional[str]:
        """Closes the entry and returns the initials, or None if nothing was typed."""
        if not self.active:
            return None
        name = self.text
        self.cancel()
        return name or None
