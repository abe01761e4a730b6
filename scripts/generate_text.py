#!/usr/bin/env python3
"""
Train a character language model on a text file and generate from it.

Usage:
    python scripts/generate_text.py corpus.txt --window-length 7 --seed-text "Once up" --length 300
    python scripts/generate_text.py corpus.txt -w 2 -s ab -n 50 --random --show-table
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from char_lm import CleanCorpusConfig, LanguageModel, ModelConfig, PreconditionError

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

DEFAULT_SEED = 20


def build_config(args: argparse.Namespace) -> ModelConfig:
    """Merge an optional JSON config file with command-line overrides."""
    config_dict = {}
    if args.config:
        with open(args.config, 'r') as f:
            config_dict = json.load(f)

    if args.window_length is not None:
        config_dict["window_length"] = args.window_length
    if args.random:
        config_dict["seed"] = None
    elif args.seed is not None:
        config_dict["seed"] = args.seed
    else:
        config_dict.setdefault("seed", DEFAULT_SEED)

    return ModelConfig.from_dict(config_dict)


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Character-level window language model"
    )
    parser.add_argument("corpus", type=Path, help="Training text file")
    parser.add_argument("--window-length", "-w", type=int, help="Window size in characters")
    parser.add_argument("--seed-text", "-s", required=True, help="Text to start generating from")
    parser.add_argument("--length", "-n", type=int, default=200, help="Number of characters to generate")
    parser.add_argument("--seed", type=int, help=f"Random seed (default {DEFAULT_SEED})")
    parser.add_argument("--random", action="store_true", help="Use a non-deterministic seed")
    parser.add_argument("--clean", action="store_true", help="Normalize the corpus before training")
    parser.add_argument("--encoding", default="utf-8", help="Corpus file encoding")
    parser.add_argument("--show-table", action="store_true", help="Print the learned window table")
    parser.add_argument("--config", "-c", type=str, help="Path to a JSON model config")
    args = parser.parse_args()

    config = build_config(args)
    logger.info(f"Model config: {config.to_dict()}")

    model = LanguageModel.from_config(config)
    try:
        model.train_file(
            args.corpus,
            encoding=args.encoding,
            clean=CleanCorpusConfig() if args.clean else None,
        )
        text = model.generate(args.seed_text, args.length)
    except (FileNotFoundError, UnicodeDecodeError, PreconditionError) as e:
        logger.error(str(e))
        return 1

    if args.show_table:
        print(model)
    print(text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
