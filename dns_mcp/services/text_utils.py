"""Text helpers shared by the zone analyzer and config scanners."""
from typing import Any, Generator, Iterable


def ensure_text(value: Any, field_name: str) -> str:
    """Coerce tool input to text.

    Args:
        value: Raw input value
        field_name: Argument name used in error messages

    Returns:
        The value as a str

    Raises:
        TypeError: If the value is neither text nor bytes
        UnicodeDecodeError: If bytes are not valid UTF-8
    """
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode('utf-8')
    raise TypeError(f"{field_name} must be text, got {type(value).__name__}")


def strip_inline_comment(line: str, marker: str = ';') -> str:
    """Remove a trailing comment that starts outside double quotes.

    Args:
        line: Physical line
        marker: Comment character

    Returns:
        Line without the comment, right-stripped
    """
    in_quotes = False
    escaped = False
    for index, char in enumerate(line):
        if escaped:
            escaped = False
        elif char == '\\':
            escaped = True
        elif char == '"':
            in_quotes = not in_quotes
        elif char == marker and not in_quotes:
            return line[:index].rstrip()
    return line


def iter_config_lines(
    content: str,
    comment_markers: Iterable[str]
) -> Generator[str, None, None]:
    """Yield trimmed lines that are neither blank nor comments.

    Args:
        content: Configuration text
        comment_markers: Prefixes that start a whole-line comment

    Yields:
        Trimmed content lines in order
    """
    markers = tuple(comment_markers)
    for raw_line in content.split('\n'):
        line = raw_line.strip()
        if not line or line.startswith(markers):
            continue
        yield line
