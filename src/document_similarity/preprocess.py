import logging
import re
import unicodedata
from typing import FrozenSet, Iterable, List, Optional

import nltk

from .models import ComparisonConfig, Document


_WORD_RE = re.compile(r"\w+")


class Preprocessor:
    def __init__(
        self,
        config: Optional[ComparisonConfig] = None,
        stop_words: Optional[Iterable[str]] = None,
    ) -> None:
        self.config = config or ComparisonConfig()
        self._stop_words: Optional[FrozenSet[str]] = (
            frozenset(word.lower() for word in stop_words)
            if stop_words is not None
            else None
        )

    @property
    def stop_words(self) -> FrozenSet[str]:
        if self._stop_words is None:
            self._stop_words = self._load_stop_words(self.config.stopwords_language)
        return self._stop_words

    @staticmethod
    def _load_stop_words(language: str) -> FrozenSet[str]:
        try:
            nltk.data.find("corpora/stopwords")
        except LookupError:
            logging.info("Downloading nltk stop-word corpus")
            nltk.download("stopwords", quiet=True)
        from nltk.corpus import stopwords

        return frozenset(stopwords.words(language))

    def normalize(self, text: str) -> str:
        normalized = text
        if self.config.lowercase:
            normalized = normalized.lower()
        normalized = self._normalize_whitespace(normalized)
        if self.config.strip_accents:
            normalized = self._strip_accents(normalized)
        return normalized

    @staticmethod
    def _normalize_whitespace(text: str) -> str:
        text = text.replace("\r\n", "\n").replace("\r", "\n")
        text = re.sub(r"[ \t\f\v]+", " ", text)
        text = re.sub(r" ?\n ?", "\n", text)
        text = re.sub(r"\n{3,}", "\n\n", text)
        return text.strip()

    @staticmethod
    def _strip_accents(text: str) -> str:
        return "".join(
            c
            for c in unicodedata.normalize("NFKD", text)
            if not unicodedata.combining(c)
        )

    def tokenize(self, text: str) -> List[str]:
        return _WORD_RE.findall(text)

    def remove_stopwords(self, tokens: Iterable[str]) -> List[str]:
        stop_words = self.stop_words
        return [token for token in tokens if token.lower() not in stop_words]

    def prepare(self, document: Document) -> List[str]:
        """Normalised word tokens of ``document``, stop words removed if configured."""
        tokens = self.tokenize(self.normalize(document.text))
        if self.config.remove_stopwords:
            tokens = self.remove_stopwords(tokens)
        return tokens
