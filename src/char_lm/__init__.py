"""Character-level window language model.

Train on a corpus, then extend seed text one sampled character at a time.
"""

from .corpus import CharStream, FileCharStream, StringCharStream, iter_chars, load_corpus
from .errors import PreconditionError
from .frequency import CharObservation, WindowTable
from .model import LanguageModel, ModelConfig
from .text_cleaning import CleanCorpusConfig, clean_corpus

__all__ = [
    "CharObservation",
    "CharStream",
    "CleanCorpusConfig",
    "FileCharStream",
    "LanguageModel",
    "ModelConfig",
    "PreconditionError",
    "StringCharStream",
    "WindowTable",
    "clean_corpus",
    "iter_chars",
    "load_corpus",
]
