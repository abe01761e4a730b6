from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Iterator, Optional, Protocol, TextIO, runtime_checkable

from .text_cleaning import CleanCorpusConfig, clean_corpus

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 64 * 1024


@runtime_checkable
class CharStream(Protocol):
    """Ordered source of single characters consumed by `LanguageModel.train`."""

    def has_next(self) -> bool: ...

    def next(self) -> str: ...


class StringCharStream:
    """Character stream over an in-memory string."""

    def __init__(self, text: str) -> None:
        self._text = text
        self._pos = 0

    def has_next(self) -> bool:
        return self._pos < len(self._text)

    def next(self) -> str:
        if not self.has_next():
            raise StopIteration
        ch = self._text[self._pos]
        self._pos += 1
        return ch

    def __iter__(self) -> Iterator[str]:
        return self

    __next__ = next


class FileCharStream:
    """Character stream over a text file, read lazily in chunks.

    Owns the file handle: it is opened on construction and closed when the
    stream is exhausted or the context manager exits.
    """

    def __init__(self, path: str | Path, encoding: str = "utf-8") -> None:
        self.path = Path(path)
        try:
            self._file: Optional[TextIO] = open(self.path, "r", encoding=encoding)
        except FileNotFoundError:
            logger.error(f"Corpus file not found: {self.path}")
            raise
        self._buffer = ""
        self._pos = 0

    def _fill(self) -> bool:
        if self._pos < len(self._buffer):
            return True
        if self._file is None:
            return False
        try:
            self._buffer = self._file.read(_CHUNK_SIZE)
        except UnicodeDecodeError as e:
            logger.error(f"Encoding error in {self.path}: {e}")
            self.close()
            raise
        self._pos = 0
        if not self._buffer:
            self.close()
            return False
        return True

    def has_next(self) -> bool:
        return self._fill()

    def next(self) -> str:
        if not self._fill():
            raise StopIteration
        ch = self._buffer[self._pos]
        self._pos += 1
        return ch

    @property
    def closed(self) -> bool:
        return self._file is None

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None

    def __iter__(self) -> Iterator[str]:
        return self

    __next__ = next

    def __enter__(self) -> "FileCharStream":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


def iter_chars(corpus: CharStream | Iterable[str]) -> Iterator[str]:
    """Iterate any corpus source, reading bare CharStreams through has_next/next."""
    if isinstance(corpus, CharStream):
        while corpus.has_next():
            yield corpus.next()
    else:
        yield from corpus


def load_corpus(
    path: str | Path,
    encoding: str = "utf-8",
    clean: CleanCorpusConfig | None = None,
) -> str:
    """Read a whole corpus file, optionally normalizing it with `clean_corpus`."""

    try:
        text = Path(path).read_text(encoding=encoding)
    except FileNotFoundError:
        logger.error(f"Corpus file not found: {path}")
        raise
    except UnicodeDecodeError as e:
        logger.error(f"Encoding error in {path}: {e}")
        raise

    if clean is not None:
        text = clean_corpus(text, clean)

    logger.info(f"Loaded corpus {path} ({len(text)} chars)")
    return text
