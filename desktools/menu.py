"""Menu matching and input-line editing: filters items by typed text, edits the input line."""

import sys
from dataclasses import dataclass
from typing import Iterable, List, Optional

BUFSIZ = 8192
WORD_DELIMITERS = " "


@dataclass
class Item:
    """A menu entry read from input; ``out`` marks entries already printed."""

    text: str
    out: bool = False


def cistrstr(haystack, needle):
    """Return the index of the first case-insensitive occurrence of ``needle``, or None."""
    if not needle:
        return 0
    index = haystack.lower().find(needle.lower())
    return None if index == -1 else index


def _tokens(text):
    return [token for token in text.split(" ") if token]


def _fold(s, case_insensitive):
    return s.lower() if case_insensitive else s


def _contains(haystack, needle, case_insensitive):
    if case_insensitive:
        return cistrstr(haystack, needle) is not None
    return needle in haystack


def match(items: Iterable[Item], text: str, case_insensitive: bool = False) -> List[Item]:
    """Return the items containing every space-separated token of ``text``.

    Exact matches come first, then items starting with the first token,
    then the remaining substring matches; each group keeps input order.
    """
    tokens = _tokens(text)
    exact, prefix, substring = [], [], []
    first = _fold(tokens[0], case_insensitive) if tokens else ""
    whole = _fold(text, case_insensitive)
    for item in items:
        if not all(_contains(item.text, token, case_insensitive) for token in tokens):
            continue
        candidate = _fold(item.text, case_insensitive)
        if not tokens or candidate == whole:
            exact.append(item)
        elif candidate.startswith(first):
            prefix.append(item)
        else:
            substring.append(item)
    return exact + prefix + substring


def read_items(stream=None) -> List[Item]:
    """Read one item per line from ``stream`` (standard input by default)."""
    if stream is None:
        stream = sys.stdin
    items = []
    for line in stream:
        if line.endswith("\n"):
            line = line[:-1]
        items.append(Item(line))
    return items


@dataclass
class InputLine:
    """The editable text of the menu's input field and its cursor position."""

    text: str = ""
    cursor: int = 0
    delimiters: str = WORD_DELIMITERS
    max_bytes: int = BUFSIZ - 1

    def __post_init__(self):
        if not 0 <= self.cursor <= len(self.text):
            raise ValueError("cursor outside of text")

    def _is_delim(self, char):
        return char in self.delimiters

    def insert(self, s):
        """Insert ``s`` at the cursor; return False if the line would grow too long."""
        if len(self.text.encode("utf-8")) + len(s.encode("utf-8")) > self.max_bytes:
            return False
        self.text = self.text[:self.cursor] + s + self.text[self.cursor:]
        self.cursor += len(s)
        return True

    def _remove_before(self, count):
        start = self.cursor - count
        self.text = self.text[:start] + self.text[self.cursor:]
        self.cursor = start

    def backspace(self):
        """Delete the character before the cursor; return whether anything changed."""
        if self.cursor == 0:
            return False
        self._remove_before(1)
        return True

    def delete(self):
        """Delete the character under the cursor; return whether anything changed."""
        if self.cursor >= len(self.text):
            return False
        self.cursor += 1
        return self.backspace()

    def kill_to_end(self):
        """Delete everything from the cursor to the end of the line."""
        self.text = self.text[:self.cursor]

    def kill_to_start(self):
        """Delete everything before the cursor."""
        self.text = self.text[self.cursor:]
        self.cursor = 0

    def delete_word(self):
        """Delete the word before the cursor together with the delimiters after it."""
        while self.cursor > 0 and self._is_delim(self.text[self.cursor - 1]):
            self._remove_before(1)
        while self.cursor > 0 and not self._is_delim(self.text[self.cursor - 1]):
            self._remove_before(1)

    def move_word_edge(self, direction):
        """Move to the start of the previous word (direction < 0) or end of the next one."""
        if direction < 0:
            while self.cursor > 0 and self._is_delim(self.text[self.cursor - 1]):
                self.cursor -= 1
            while self.cursor > 0 and not self._is_delim(self.text[self.cursor - 1]):
                self.cursor -= 1
        else:
            end = len(self.text)
            while self.cursor < end and self._is_delim(self.text[self.cursor]):
                self.cursor += 1
            while self.cursor < end and not self._is_delim(self.text[self.cursor]):
                self.cursor += 1

    def move_left(self):
        """Move the cursor one character left; return whether it moved."""
        if self.cursor == 0:
            return False
        self.cursor -= 1
        return True

    def move_right(self):
        """Move the cursor one character right; return whether it moved."""
        if self.cursor >= len(self.text):
            return False
        self.cursor += 1
        return True

    def complete(self, item: Optional[Item]):
        """Replace the text with ``item``'s text and put the cursor at its end."""
        if item is None:
            return False
        text = item.text
        while len(text.encode("utf-8")) > self.max_bytes:
            text = text[:-1]
        self.text = text
        self.cursor = len(text)
        return True