from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass

import regex  # type: ignore


_SPACE_RUN_RE = re.compile(r"[ \t]+")
_BLANK_LINES_RE = re.compile(r"\n{3,}")


@dataclass(frozen=True)
class CleanCorpusConfig:
    lowercase: bool = False
    strip_accents: bool = False
    remove_urls: bool = True
    normalize_newlines: bool = True
    collapse_spaces: bool = True


def clean_corpus(text: str, config: CleanCorpusConfig | None = None) -> str:
    """Light normalization of a training corpus.

    Unlike word-level cleaning, line breaks and punctuation are kept: they are
    characters the model should learn to produce.
    """

    cfg = config or CleanCorpusConfig()
    s = text

    if cfg.normalize_newlines:
        s = s.replace("\r\n", "\n").replace("\r", "\n")

    if cfg.lowercase:
        s = s.lower()

    if cfg.remove_urls:
        s = re.sub(r"https?://\S+|www\.\S+", " ", s)

    if cfg.strip_accents:
        s = regex.sub(r"\p{Mn}+", "", unicodedata.normalize("NFKD", s))

    # Control characters other than tab and newline.
    s = re.sub(r"[\x00-\x08\x0B-\x1F\x7F]", " ", s)

    if cfg.collapse_spaces:
        s = _SPACE_RUN_RE.sub(" ", s)
        s = _BLANK_LINES_RE.sub("\n\n", s)

    return s
