import re
import unicodedata
from typing import Iterable, Optional

from .core.decorators import filter_method
from .core.processor import StringProcessor


class NormalizeWhitespace(StringProcessor):
    """
    Trims the text and collapses every run of whitespace into one space.
    """
    meta = {
        "name": "normalize_whitespace",
        "description": "Trim and collapse whitespace",
    }

    @filter_method
    def strip(self, text: str) -> str:
        return text.strip()

    @filter_method
    def collapse_spaces(self, text: str) -> str:
        return re.sub(r"\s+", " ", text)


class Slugify(StringProcessor):
    meta = {
        "name": "slugify",
        "description": "Turn a title into a lowercase ASCII slug",
    }

    @filter_method
    def transliterate(self, text: str) -> str:
        normalized = unicodedata.normalize("NFKD", text)
        return normalized.encode("ascii", "ignore").decode("ascii")

    @filter_method
    def lowercase(self, text: str) -> str:
        return text.lower()

    @filter_method
    def hyphenate(self, text: str) -> str:
        return re.sub(r"[^a-z0-9]+", "-", text)

    @filter_method
    def trim_hyphens(self, text: str) -> str:
        return text.strip("-")


class Censor(StringProcessor):
    """
    Masks a list of words, matched case-insensitively on word boundaries.
    """
    meta = {
        "name": "censor",
        "description": "Mask forbidden words",
    }

    def __init__(self, words: Optional[Iterable[str]] = None, mask: str = "*", **kwargs):
        super().__init__(**kwargs)
        if len(mask) != 1:
            raise ValueError(f"mask must be a single character, got {mask!r}")
        self.words = [word for word in (words or []) if word]
        self.mask = mask
        self._pattern = None
        if self.words:
            alternatives = "|".join(re.escape(word) for word in sorted(self.words, key=len, reverse=True))
            self._pattern = re.compile(rf"\b(?:{alternatives})\b", re.IGNORECASE)

    @filter_method
    def mask_words(self, text: str) -> str:
        if self._pattern is None:
            return text
        return self._pattern.sub(lambda match: self.mask * len(match.group(0)), text)


class Shout(StringProcessor):
    meta = {
        "name": "shout",
        "description": "Uppercase the text and end it with an exclamation mark",
    }

    @filter_method
    def uppercase(self, text: str) -> str:
        return text.upper()

    @filter_method(name="exclaim")
    def add_exclamation(self, text: str) -> str:
        # punctuation already at the end is replaced, not doubled
        return text.rstrip(".!?") + "!"
