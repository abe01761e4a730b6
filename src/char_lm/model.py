"""
Language Model Module

A fixed-window character language model. Training counts, for every
substring of `window_length` characters in the corpus, which characters
follow it; generation extends a seed text by repeatedly sampling the next
character from the distribution of the current window.

Usage:
    model = LanguageModel(window_length=3, seed=42)
    model.train("abcabcabcabc")
    model.generate("abc", 3)   # "abcabc"
"""

from __future__ import annotations

import logging
import numbers
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Dict, Iterable, Optional

import numpy as np
import pandas as pd

from .corpus import FileCharStream, iter_chars, load_corpus
from .errors import PreconditionError
from .frequency import WindowTable
from .text_cleaning import CleanCorpusConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ModelConfig:
    """
    Construction parameters of a LanguageModel.

    Attributes:
        window_length: Number of characters conditioning each prediction
        seed: Random seed for reproducible generation, None for OS entropy
    """
    window_length: int = 3
    seed: Optional[int] = None

    @classmethod
    def from_dict(cls, config_dict: Dict) -> "ModelConfig":
        """Create a ModelConfig from a dictionary, ignoring unknown keys."""
        return cls(**{k: v for k, v in config_dict.items() if k in cls.__annotations__})

    def to_dict(self) -> Dict:
        return asdict(self)


class LanguageModel:
    """
    Window -> next-character distribution table with its own random source.

    Attributes:
        window_length: Size of the sliding window in characters
        table: Mapping from each window seen in training to its WindowTable
        random_source: numpy Generator used for sampling, owned by this model
    """

    def __init__(self, window_length: int, seed: Optional[int] = None):
        """
        Initialize an empty model.

        Args:
            window_length: Positive window size
            seed: Integer seed for reproducible output; None gives a
                non-deterministic generator

        Raises:
            PreconditionError: If window_length is not a positive integer
        """
        if isinstance(window_length, bool) or not isinstance(window_length, numbers.Integral) or window_length <= 0:
            raise PreconditionError(f"window_length must be >= 1, got {window_length!r}")

        self.window_length = int(window_length)
        self.seed = seed
        # numpy seeds must be non-negative; fold negatives into the 64-bit range.
        self.random_source = np.random.default_rng(int(seed) % 2**64 if seed is not None else None)
        self.table: Dict[str, WindowTable] = {}

    @classmethod
    def from_config(cls, config: ModelConfig | None = None) -> "LanguageModel":
        cfg = config or ModelConfig()
        return cls(cfg.window_length, seed=cfg.seed)

    def train(self, corpus: Iterable[str]) -> None:
        """
        Build the window table from a character stream in a single pass.

        Args:
            corpus: Iterable of single characters (a str, a CharStream, ...)
                yielding at least window_length + 1 characters

        Raises:
            PreconditionError: If the corpus is too short; the current
                table is left untouched
        """
        chars = iter_chars(corpus)
        window = "".join(ch for _, ch in zip(range(self.window_length), chars))
        if len(window) < self.window_length:
            raise PreconditionError(
                f"corpus must have at least {self.window_length + 1} characters, got {len(window)}"
            )

        table: Dict[str, WindowTable] = {}
        consumed = len(window)
        for ch in chars:
            window_table = table.get(window)
            if window_table is None:
                window_table = table[window] = WindowTable()
            window_table.observe(ch)
            window = window[1:] + ch
            consumed += 1

        if not table:
            raise PreconditionError(
                f"corpus must have at least {self.window_length + 1} characters, got {consumed}"
            )

        for window_table in table.values():
            window_table.finalize_probabilities()

        self.table = table
        logger.info(f"Trained on {consumed} chars: {len(table)} distinct windows")

    def train_file(
        self,
        path: str | Path,
        encoding: str = "utf-8",
        clean: CleanCorpusConfig | None = None,
    ) -> None:
        """
        Train on the contents of a text file.

        Args:
            path: Corpus file
            encoding: File encoding
            clean: Normalization to apply first; the file is then loaded
                whole instead of streamed
        """
        if clean is not None:
            self.train(load_corpus(path, encoding=encoding, clean=clean))
            return

        logger.info(f"Streaming corpus {path}")
        with FileCharStream(path, encoding=encoding) as stream:
            self.train(stream)

    def generate(self, seed_text: str, target_length: int) -> str:
        """
        Extend seed_text by sampling up to target_length characters.

        Generation stops early when the current window never occurred in
        training; that is a normal result, not an error.

        Args:
            seed_text: Starting text; its last window_length characters form
                the first window
            target_length: Maximum number of characters to append

        Returns:
            seed_text followed by the generated characters

        Raises:
            PreconditionError: If seed_text is shorter than window_length or
                target_length is negative
        """
        if len(seed_text) < self.window_length:
            raise PreconditionError(
                f"seed_text must have at least {self.window_length} characters, got {len(seed_text)}"
            )
        if target_length < 0:
            raise PreconditionError(f"target_length must be >= 0, got {target_length}")

        window = seed_text[len(seed_text) - self.window_length:]
        generated = []
        while len(generated) < target_length:
            window_table = self.table.get(window)
            if window_table is None:
                logger.debug(f"Unseen window {window!r}, stopping after {len(generated)} chars")
                break
            ch = window_table.sample(self.random_source)
            generated.append(ch)
            window = window[1:] + ch

        return seed_text + "".join(generated)

    def render(self) -> str:
        """One line per window: `'key' : (('c' count p cp) ...)`."""
        lines = [f"{key!r} : {window_table}\n" for key, window_table in self.table.items()]
        return "".join(lines)

    def __str__(self) -> str:
        return self.render()

    def to_frame(self) -> pd.DataFrame:
        """Flatten the table into rows of window, character, count, p, cp."""
        rows = [
            {"window": key, "character": obs.character, "count": obs.count, "p": obs.p, "cp": obs.cp}
            for key, window_table in self.table.items()
            for obs in window_table
        ]
        return pd.DataFrame(rows, columns=["window", "character", "count", "p", "cp"])
