"""
Quote text format parser.

The format is line oriented:

- a line starting with ``#`` is a comment and is dropped;
- a leading ``\\#`` is unescaped to a literal ``#`` line;
- a line consisting of a single ``\\`` is an empty line inside the quote;
- an empty line ends the current quote.

Parsing never fails; odd input simply degrades to fewer or shorter quotes.
"""

from typing import Iterable, List, Tuple, Union

COMMENT_PREFIX = "#"
ESCAPED_COMMENT_PREFIX = "\\#"
EMPTY_LINE_MARKER = "\\"


def _strip_line_ending(line: str) -> str:
    # 只去掉一个行尾 "\n" 以及其前面的一个 "\r"
    if line.endswith("\n"):
        line = line[:-1]
    if line.endswith("\r"):
        line = line[:-1]
    return line


def _flush(accumulator: List[str], quotes: List[str]) -> None:
    # 空累加器不生成语录（包括输入末尾）
    if accumulator:
        quotes.append("\n".join(accumulator))
        accumulator.clear()


def parse_quotes(source: Union[str, Iterable[str]]) -> Tuple[str, ...]:
    """将原始文本解析为语录元组

    Args:
        source: 完整文本，或逐行迭代的行序列（可带换行符）

    Returns:
        Tuple[str, ...]: 按出现顺序排列的语录
    """
    lines = source.split("\n") if isinstance(source, str) else source

    quotes: List[str] = []
    accumulator: List[str] = []

    for raw_line in lines:
        line = _strip_line_ending(raw_line)

        if line.startswith(COMMENT_PREFIX):
            continue

        if line.startswith(ESCAPED_COMMENT_PREFIX):
            line = line[1:]

        if line:
            if line == EMPTY_LINE_MARKER:
                line = ""
            accumulator.append(line)
        else:
            _flush(accumulator, quotes)

    _flush(accumulator, quotes)
    return tuple(quotes)
