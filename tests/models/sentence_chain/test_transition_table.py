import pytest
from unittest.mock import patch

from models.sentence_chain.transition_table import (
    BEGINS_SENTENCE,
    TransitionTable,
    ends_with_sentence_punctuation,
    record_transition,
)


@pytest.fixture
def table():
    """Fixture to initialize an empty TransitionTable."""
    return TransitionTable()


def test_new_table_holds_only_sentinel(table):
    assert list(table) == [BEGINS_SENTENCE]
    assert table.successors(BEGINS_SENTENCE) == []
    assert len(table) == 1


def test_get_or_create_inserts_once(table):
    successors = table.get_or_create("cat")
    successors.append("sat")

    # Same live list on the second call
    assert table.get_or_create("cat") is successors
    assert table.successors("cat") == ["sat"]
    assert "cat" in table


def test_successors_does_not_insert(table):
    assert table.successors("dog") is None
    assert "dog" not in table


def test_as_mapping_is_read_only_snapshot(table):
    table.get_or_create("a").append("b")
    view = table.as_mapping()

    assert view["a"] == ("b",)
    with pytest.raises(TypeError):
        view["a"] = ("c",)

    # Later changes are not reflected in an existing snapshot
    table.get_or_create("a").append("c")
    assert view["a"] == ("b",)
    assert table.as_mapping()["a"] == ("b", "c")


def test_str_renders_mapping(table):
    table.get_or_create("Hello").append("world.")
    assert str(table) == "{'__$': [], 'Hello': ['world.']}"


@pytest.mark.parametrize("word", ["stop.", "wait!", "really?", "?"])
def test_ends_with_sentence_punctuation_true(word):
    assert ends_with_sentence_punctuation(word) is True


@pytest.mark.parametrize("word", ["stop", "", None, "well,", "end.)", BEGINS_SENTENCE])
def test_ends_with_sentence_punctuation_false(word):
    assert ends_with_sentence_punctuation(word) is False


def test_ends_with_sentence_punctuation_logs_fault():
    with patch("models.sentence_chain.transition_table.logger") as mock_logger:
        # An int has no last character to index
        assert ends_with_sentence_punctuation(42) is False
        mock_logger.error.assert_called_once()
        assert "42" in mock_logger.error.call_args[0][0]


class TestRecordTransition:
    """Tests for the single-token ingestion step."""

    def test_first_token_goes_under_sentinel(self, table):
        prev_word = record_transition(table, BEGINS_SENTENCE, "Hello")

        assert prev_word == "Hello"
        assert table.successors(BEGINS_SENTENCE) == ["Hello"]

    def test_token_goes_under_previous_word(self, table):
        prev_word = record_transition(table, "Hello", "world.")

        assert prev_word == "world."
        assert table.successors("Hello") == ["world."]
        assert table.successors(BEGINS_SENTENCE) == []

    def test_token_after_terminator_starts_sentence(self, table):
        prev_word = record_transition(table, "world.", "Bye.")

        assert prev_word == "Bye."
        assert table.successors(BEGINS_SENTENCE) == ["Bye."]
        assert "world." not in table

    def test_duplicates_are_kept(self, table):
        record_transition(table, "the", "cat")
        record_transition(table, "the", "cat")

        assert table.successors("the") == ["cat", "cat"]

    @pytest.mark.parametrize("token", [None, ""])
    def test_empty_token_is_noop(self, table, token):
        prev_word = record_transition(table, "Hello", token)

        assert prev_word == "Hello"
        assert "Hello" not in table
        assert table.successors(BEGINS_SENTENCE) == []
