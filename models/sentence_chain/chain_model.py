"""
Sentence Chain Model

A first-order Markov chain over whitespace-delimited words. Text is ingested
line by line into a TransitionTable; sentences are produced by a random walk
starting from the BEGINS_SENTENCE sentinel and stopping at the first word
ending in '.', '!' or '?', or at a word with no recorded successor.

Punctuation stays attached to its word, so "end." is a different token than
"end" and carries its own sentence terminator.

Usage:
    >>> model = ChainModel(seed=7)
    >>> model.ingest_line("The cat sat. The dog ran.")
    >>> model.generate_sentence() in {"The cat sat.", "The dog ran."}
    True

Notes:
    - Not thread-safe. Concurrent ingestion and generation need external locking.
    - Generation is capped at `max_sentence_length` words; pass None to let
      the walk run until the chain itself stops it.
"""

import logging
import random

from models.sentence_chain.line_sources import FileLineSource
from models.sentence_chain.transition_table import (
    BEGINS_SENTENCE,
    PUNCTUATION_MARKS,
    TransitionTable,
    ends_with_sentence_punctuation,
    record_transition,
)
from utils.config_loader import load_chain_config
from utils.loggers.json_logger import logger_from_config

__all__ = [
    "BEGINS_SENTENCE",
    "PUNCTUATION_MARKS",
    "DEFAULT_MAX_SENTENCE_LENGTH",
    "ChainModel",
]

DEFAULT_MAX_SENTENCE_LENGTH = 1000


class ChainModel:
    """Word chain built from text lines and walked to generate sentences."""

    def __init__(self, max_sentence_length=DEFAULT_MAX_SENTENCE_LENGTH, seed=None, rng=None, logger=None):
        """
        Args:
            max_sentence_length (int or None): Word cap for one generated sentence, None for no cap
            seed (int, optional): Seed for the default random source; ignored when `rng` is given
            rng (random.Random, optional): Object with a `choice(sequence)` method used to pick successors
            logger (logging.Logger, optional): Diagnostic sink; defaults to this module's logger
        """
        if max_sentence_length is not None and max_sentence_length < 1:
            raise ValueError("max_sentence_length must be a positive integer or None")

        self.max_sentence_length = max_sentence_length
        self.rng = rng if rng is not None else random.Random(seed)
        self.logger = logger or logging.getLogger(__name__)

        self._table = TransitionTable()
        self._prev_word = BEGINS_SENTENCE

        self.logger.debug("ChainModel initialized", extra={
            "metrics": {
                "max_sentence_length": max_sentence_length,
                "seeded": seed is not None or rng is not None,
            }
        })

    @classmethod
    def from_config(cls, config=None, environment="development", logger=None):
        """
        Build a model from a chain config dict.

        Args:
            config (dict, optional): Config as returned by `load_chain_config`; loaded when None
            environment (str): Environment used when the config has to be loaded
            logger (logging.Logger, optional): Diagnostic sink; built from the config's `logging` section when None

        Returns:
            ChainModel: A new, empty model
        """
        if config is None:
            config = load_chain_config(environment)

        if logger is None:
            logger = logger_from_config(__name__, config)

        return cls(
            max_sentence_length=config.get("max_sentence_length", DEFAULT_MAX_SENTENCE_LENGTH),
            seed=config.get("seed"),
            logger=logger,
        )

    # Ingestion

    def ingest_source(self, source):
        """
        Ingest every line produced by a line source.

        Failures to open or read the source are logged and swallowed; whatever
        was read before the failure stays in the model.

        Args:
            source: Object with a `lines()` method yielding text lines

        Returns:
            int: Number of lines consumed
        """
        consumed = 0
        try:
            for line in source.lines():
                self.ingest_line(line)
                consumed += 1
        except FileNotFoundError as e:
            self.logger.error(f"Error: File not found - {source!r}", extra={
                "metrics": {"source": repr(source), "error": str(e)}
            })
            return consumed
        except Exception as e:
            self.logger.error(f"An unexpected error occurred while reading {source!r}: {e}", exc_info=True, extra={
                "metrics": {"source": repr(source), "lines_consumed": consumed}
            })
            return consumed

        self.logger.info("Source ingested", extra={
            "metrics": {
                "source": repr(source),
                "lines": consumed,
                "keys": len(self._table),
            }
        })
        return consumed

    def add_from_file(self, filename, encoding="utf-8"):
        """Ingest a text file. A missing file is logged, not raised."""
        return self.ingest_source(FileLineSource(filename, encoding=encoding))

    def ingest_text(self, text):
        """Ingest a multi-line string."""
        for line in text.splitlines():
            self.ingest_line(line)

    def ingest_line(self, line):
        """
        Split a line on whitespace and ingest each token in order.

        Blank and whitespace-only lines (and None) are ignored.
        """
        if not line or not line.strip():
            return
        for word in line.split():
            self.ingest_word(word)

    def ingest_word(self, word):
        """Record `word` as the successor of the previous word and advance the cursor."""
        if not word:
            return
        self._prev_word = record_transition(self._table, self._prev_word, word)

    # Generation

    @staticmethod
    def ends_with_sentence_punctuation(word):
        """True if the last character of `word` is one of PUNCTUATION_MARKS."""
        return ends_with_sentence_punctuation(word)

    def pick_successor(self, word):
        """
        Pick a random successor of `word`.

        Returns:
            str or None: A uniformly chosen successor, None if `word` has none
        """
        successors = self._table.successors(word)
        if not successors:
            return None
        return self.rng.choice(successors)

    def generate_sentence(self):
        """
        Walk the chain from the sentence start and return the sentence.

        Returns:
            str: Words joined by single spaces; "" when nothing has been ingested
        """
        words = []
        current = self.pick_successor(BEGINS_SENTENCE)

        while current is not None:
            words.append(current)
            if ends_with_sentence_punctuation(current):
                break
            if self.max_sentence_length is not None and len(words) >= self.max_sentence_length:
                self.logger.warning("Sentence length cap reached", extra={
                    "metrics": {"max_sentence_length": self.max_sentence_length}
                })
                break
            current = self.pick_successor(current)

        return " ".join(words)

    def generate_sentences(self, count):
        """Generate `count` independent sentences."""
        if count < 0:
            raise ValueError("count must be non-negative")
        return [self.generate_sentence() for _ in range(count)]

    # Inspection

    @property
    def words(self):
        """Read-only snapshot of the transition mapping."""
        return self._table.as_mapping()

    @property
    def prev_word(self):
        return self._prev_word

    def __str__(self):
        return str(self._table)

    def __repr__(self):
        return f"ChainModel(keys={len(self._table)}, prev_word={self._prev_word!r})"
