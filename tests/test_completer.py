import pytest

from pyishell.command import Command
from pyishell.completer import Completer


@pytest.fixture
def root():
    root = Command()
    for name in ("exit", "help", "clear", "greet"):
        root.add_cmd(Command(name=name))
    suggest = Command(name="suggest")
    suggest.add_cmd(Command(name="add"))
    suggest.add_cmd(Command(name="words", completer=lambda args: ["alpha", "beta"]))
    root.add_cmd(suggest)
    return root


def test_empty_line_lists_top_level(root):
    suggestions, length = Completer(root).complete("", 0)
    assert sorted(suggestions) == ["clear", "exit", "greet", "help", "suggest"]
    assert length == 0


def test_partial_word(root):
    suggestions, length = Completer(root).complete("he", 2)
    assert suggestions == ["lp"]
    assert length == 2


def test_complete_word_gets_space(root):
    suggestions, length = Completer(root).complete("help", 4)
    assert suggestions == [" "]
    assert length == 4


def test_subcommands_after_space(root):
    line = "suggest "
    suggestions, length = Completer(root).complete(line, len(line))
    assert sorted(suggestions) == ["add", "words"]
    assert length == 0


def test_custom_completer(root):
    line = "suggest words al"
    suggestions, length = Completer(root).complete(line, len(line))
    assert suggestions == ["pha"]
    assert length == len("al")


def test_completer_with_prefix_takes_precedence():
    received = []

    def with_prefix(prefix, args):
        received.append((prefix, args))
        return ["xyz"]

    root = Command()
    root.add_cmd(
        Command(name="cmd", completer=lambda args: ["abc"], completer_with_prefix=with_prefix)
    )
    line = "cmd one x"
    suggestions, _ = Completer(root).complete(line, len(line))
    assert suggestions == ["yz"]
    assert received == [("x", ["one"])]


def test_unknown_word_falls_back_to_root(root):
    line = "nothing cl"
    suggestions, _ = Completer(root).complete(line, len(line))
    assert suggestions == ["ear"]


def test_unbalanced_quote_falls_back_to_whitespace_split():
    root = Command()
    root.add_cmd(Command(name="say", completer=lambda args: ['"hello']))
    line = 'say "he'
    suggestions, length = Completer(root).complete(line, len(line))
    assert suggestions == ["llo"]
    assert length == len('"he')


def test_disabled_returns_nothing(root):
    suggestions, length = Completer(root, disabled=lambda: True).complete("he", 2)
    assert suggestions == []
    assert length == 2


def test_get_words_for_leaf(root):
    assert Completer(root).get_words("", ["suggest", "words"]) == ["alpha", "beta"]