import pytest

from labkit.cmdline import NO_MARK, REPEAT_LAST, check_mark, parseline, parsepipe


def test_parseline_foreground():
    assert parseline("ls -al\n") == (["ls", "-al"], False)


def test_parseline_background():
    parsed = parseline("sleep 5 &\n")
    assert parsed.argv == ["sleep", "5"]
    assert parsed.bg is True


def test_parseline_collapses_spaces():
    assert parseline("   echo    a   b  \n").argv == ["echo", "a", "b"]


def test_parseline_blank_line():
    assert parseline("    \n") == ([], True)


def test_parseline_lone_ampersand():
    assert parseline("&\n") == ([], True)


def test_parseline_ampersand_prefix_counts():
    parsed = parseline("run &x\n")
    assert parsed.argv == ["run"]
    assert parsed.bg is True


def test_parseline_without_newline():
    assert parseline("pwd") == (["pwd"], False)


def test_parsepipe_no_pipe():
    assert parsepipe("ls -l\n") == ["ls -l\n"]


def test_parsepipe_splits():
    segments = parsepipe("ls | grep a | wc\n")
    assert len(segments) - 1 == 2
    assert [parseline(s).argv for s in segments] == [["ls"], ["grep", "a"], ["wc"]]


def test_parsepipe_quoted_pipe_kept():
    segments = parsepipe('echo "a|b" | wc\n')
    assert len(segments) == 2
    assert parseline(segments[0]).argv == ["echo", "a|b"]


def test_parsepipe_mixed_quotes():
    segments = parsepipe("echo \"it's\"\n")
    assert segments == ["echo it's\n"]


def test_parsepipe_single_quotes_removed():
    assert parsepipe("grep 'x|y'\n") == ["grep x|y\n"]


@pytest.mark.parametrize(
    "line, expected",
    [
        ("!!\n", REPEAT_LAST),
        ("!!!\n", NO_MARK),
        ("!12\n", 12),
        ("!a\n", NO_MARK),
        ("!1a\n", NO_MARK),
        ("!\n", NO_MARK),
        ("ls\n", NO_MARK),
        ("!7", 7),
    ],
)
def test_check_mark(line, expected):
    assert check_mark(line) == expected