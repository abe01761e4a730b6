"""
Tests for corpus character streams and loading.
"""

import unittest
import sys
import tempfile
from pathlib import Path

# Add src directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from char_lm import corpus
from char_lm.corpus import CharStream, FileCharStream, StringCharStream, iter_chars, load_corpus
from char_lm.text_cleaning import CleanCorpusConfig


class TestStringCharStream(unittest.TestCase):
    """Tests for in-memory streams."""

    def test_has_next_and_next(self):
        """Characters come out in order until the stream is exhausted."""
        stream = StringCharStream("ab")
        self.assertTrue(stream.has_next())
        self.assertEqual(stream.next(), 'a')
        self.assertEqual(stream.next(), 'b')
        self.assertFalse(stream.has_next())
        with self.assertRaises(StopIteration):
            stream.next()

    def test_iteration(self):
        """Streams are Python iterators."""
        self.assertEqual(list(StringCharStream("héllo")), list("héllo"))

    def test_protocol(self):
        """Both stream types satisfy the CharStream protocol."""
        self.assertIsInstance(StringCharStream(""), CharStream)


class TestFileCharStream(unittest.TestCase):
    """Tests for file-backed streams."""

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.path = Path(self.tmp.name) / "corpus.txt"

    def tearDown(self):
        self.tmp.cleanup()

    def test_reads_all_characters(self):
        """The stream yields the file's exact characters."""
        text = "first line\nsecond line — ünïcode\n"
        self.path.write_text(text, encoding="utf-8")
        with FileCharStream(self.path) as stream:
            self.assertIsInstance(stream, CharStream)
            self.assertEqual("".join(stream), text)

    def test_reads_across_chunks(self):
        """Files larger than one read chunk are streamed completely."""
        original = corpus._CHUNK_SIZE
        corpus._CHUNK_SIZE = 4
        try:
            self.path.write_text("abcdefghij", encoding="utf-8")
            stream = FileCharStream(self.path)
            chars = []
            while stream.has_next():
                chars.append(stream.next())
            self.assertEqual("".join(chars), "abcdefghij")
        finally:
            corpus._CHUNK_SIZE = original

    def test_closes_when_exhausted(self):
        """The file handle is released once the stream runs out."""
        self.path.write_text("xy", encoding="utf-8")
        stream = FileCharStream(self.path)
        self.assertFalse(stream.closed)
        list(stream)
        self.assertTrue(stream.closed)
        self.assertFalse(stream.has_next())

    def test_closes_on_exit(self):
        """Leaving the context manager closes the handle early."""
        self.path.write_text("xyz", encoding="utf-8")
        with FileCharStream(self.path) as stream:
            stream.next()
        self.assertTrue(stream.closed)

    def test_missing_file(self):
        """Opening a missing file logs an error and raises FileNotFoundError."""
        with self.assertLogs("char_lm.corpus", level="ERROR"):
            with self.assertRaises(FileNotFoundError):
                FileCharStream(self.path)

    def test_bad_encoding(self):
        """Undecodable bytes are logged, re-raised and the handle released."""
        self.path.write_bytes(b"\xff\xfe\xfa")
        stream = FileCharStream(self.path)
        with self.assertLogs("char_lm.corpus", level="ERROR"):
            with self.assertRaises(UnicodeDecodeError):
                stream.has_next()
        self.assertTrue(stream.closed)


class HasNextOnlyStream:
    def __init__(self, text):
        self._chars = list(text)

    def has_next(self):
        return bool(self._chars)

    def next(self):
        return self._chars.pop(0)


class TestIterChars(unittest.TestCase):
    """Tests for reading any corpus source as characters."""

    def test_bare_stream(self):
        """Streams without __iter__ are read through has_next/next."""
        self.assertEqual("".join(iter_chars(HasNextOnlyStream("abc"))), "abc")

    def test_plain_iterables(self):
        """Strings and lists are iterated directly."""
        self.assertEqual(list(iter_chars("xy")), ["x", "y"])
        self.assertEqual(list(iter_chars(["p", "q"])), ["p", "q"])


class TestLoadCorpus(unittest.TestCase):
    """Tests for whole-file corpus loading."""

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.path = Path(self.tmp.name) / "corpus.txt"

    def tearDown(self):
        self.tmp.cleanup()

    def test_plain(self):
        """Without cleaning the text is returned as stored."""
        self.path.write_text("Hello  World", encoding="utf-8")
        self.assertEqual(load_corpus(self.path), "Hello  World")

    def test_cleaned(self):
        """A cleaning config is applied to the loaded text."""
        self.path.write_text("Hello  World", encoding="utf-8")
        self.assertEqual(load_corpus(self.path, clean=CleanCorpusConfig(lowercase=True)), "hello world")

    def test_missing_file(self):
        """A missing file propagates FileNotFoundError."""
        with self.assertLogs("char_lm.corpus", level="ERROR"):
            with self.assertRaises(FileNotFoundError):
                load_corpus(self.path)

    def test_bad_encoding(self):
        """Undecodable bytes propagate UnicodeDecodeError."""
        self.path.write_bytes(b"\xff\xfe\xfa")
        with self.assertLogs("char_lm.corpus", level="ERROR"):
            with self.assertRaises(UnicodeDecodeError):
                load_corpus(self.path, encoding="utf-8")


if __name__ == '__main__':
    unittest.main()
