import io

from xtrace_collapse.writers.stackcollapse import format_line, write_stack_collapse


def test_format_line():
    assert format_line("{main};a;c", 140.0) == "{main};a;c 140.000000"


def test_write_stack_collapse():
    f = io.StringIO()
    count = write_stack_collapse(iter([("{main};b", 68.0), ("{main}", 302.0)]), f)

    assert count == 2
    assert f.getvalue().splitlines() == ["{main};b 68.000000", "{main} 302.000000"]


def test_write_sorted():
    f = io.StringIO()
    write_stack_collapse([("b", 1.0), ("a;c", 2.5), ("a", 3.0)], f, sort=True)

    assert f.getvalue() == "a 3.000000\na;c 2.500000\nb 1.000000\n"
