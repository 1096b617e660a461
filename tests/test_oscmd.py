import sys

import pytest

from utilkit.oscmd import execute_command


def _python(code):
    return f'"{sys.executable}" -c "{code}"'


def test_captures_stdout():
    result = execute_command(_python("print('hello')"))
    assert str(result).strip() == "hello"


def test_multiple_lines_kept_in_order():
    result = execute_command(_python("print('a'); print('b')"))
    assert str(result).split() == ["a", "b"]


def test_silent_command_gives_empty_text():
    result = execute_command(_python("pass"))
    assert len(result) == 0


def test_empty_command_raises():
    with pytest.raises(ValueError):
        execute_command("")