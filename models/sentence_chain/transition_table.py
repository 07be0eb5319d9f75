"""
Transition table for a first-order word chain.

Each key is a word (or the BEGINS_SENTENCE sentinel) and maps to the list of
words observed right after it. Frequency is kept by repetition, so a word
seen twice after "the" appears twice in the list for "the".
"""

import logging
from types import MappingProxyType

logger = logging.getLogger(__name__)

# Reserved key marking the start of a new sentence
BEGINS_SENTENCE = "__$"

PUNCTUATION_MARKS = ".!?"


def ends_with_sentence_punctuation(word):
    """
    Check whether a token closes a sentence.

    Args:
        word (str): Token to inspect. None and "" are accepted.

    Returns:
        bool: True if the last character is one of PUNCTUATION_MARKS.
    """
    if not word:
        return False
    try:
        return word[-1] in PUNCTUATION_MARKS
    except Exception as e:
        logger.error(f"Error checking punctuation for word: {word!r} - {e}", extra={
            "metrics": {"word": repr(word), "error_type": type(e).__name__}
        })
        return False


class TransitionTable:
    """Mapping from a word to the ordered list of its successors."""

    def __init__(self):
        self._successors = {BEGINS_SENTENCE: []}

    def get_or_create(self, key):
        """Return the live successor list for `key`, adding an empty one if missing."""
        successors = self._successors.get(key)
        if successors is None:
            successors = self._successors[key] = []
        return successors

    def successors(self, key):
        """Return the live successor list for `key`, or None. Never inserts."""
        return self._successors.get(key)

    def as_mapping(self):
        """Read-only snapshot of the table, successors as tuples."""
        return MappingProxyType(
            {key: tuple(words) for key, words in self._successors.items()}
        )

    def __contains__(self, key):
        return key in self._successors

    def __len__(self):
        return len(self._successors)

    def __iter__(self):
        return iter(self._successors)

    def __str__(self):
        return str(self._successors)


def record_transition(table, prev_word, token):
    """
    Fold one token into the table.

    A token following a sentence-ending word starts a new sentence and is
    filed under BEGINS_SENTENCE; otherwise it is filed under `prev_word`.

    Args:
        table (TransitionTable): Table to update in place
        prev_word (str): Previously ingested token, or BEGINS_SENTENCE
        token (str): Token to record

    Returns:
        str: The new previous word (`token`), or `prev_word` if the token was empty
    """
    if not token:
        return prev_word

    if ends_with_sentence_punctuation(prev_word):
        table.get_or_create(BEGINS_SENTENCE).append(token)
    else:
        table.get_or_create(prev_word).append(token)

    return token
