from typing import Iterable, TextIO


def format_line(path: str, duration: float) -> str:
    return f"{path} {duration:f}"


def write_stack_collapse(aggregates: Iterable[tuple[str, float]], f: TextIO, sort: bool = False) -> int:
    """Writes the aggregates out in the folded stack format, one "<path> <microseconds>" line each.

    :return: the number of lines written
    """
    if sort:
        aggregates = sorted(aggregates)

    count = 0
    for path, duration in aggregates:
        print(format_line(path, duration), file=f)
        count += 1

    return count
