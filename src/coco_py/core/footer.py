"""Separation of the free-text body from trailing footer pairs.

Operates on the block that follows the blank line after the header. The
first line shaped like ``Key: value`` opens the footer; everything above it
is body. Later ``Key: value`` lines add entries. A non-blank line directly
below an entry continues its value, the way git trailers fold; a blank line
ends the continuation, and prose after it belongs to no entry.
"""

from __future__ import annotations

import re

FOOTER_PATTERN: re.Pattern[str] = re.compile(
    r"^(?P<key>BREAKING[ -]CHANGE|[A-Za-z][A-Za-z0-9-]*):\s+(?P<value>\S.*)$"
)


def split_body_and_footer(block: str) -> tuple[str | None, dict[str, str] | None]:
    """Split the trailing block of a commit message.

    Duplicate keys keep the value of their last occurrence.

    Args:
        block: Text after the blank line that follows the header

    Returns:
        ``(body, footer)``. ``body`` is ``None`` when there is no text
        before the footer; ``footer`` is ``None`` when no ``Key: value``
        line exists.

    >>> split_body_and_footer("Some context.\\n\\nReviewed-by: Z\\nRefs: #123")
    ('Some context.', {'Reviewed-by': 'Z', 'Refs': '#123'})
    >>> split_body_and_footer("Only prose here.")
    ('Only prose here.', None)
    """
    lines = block.splitlines()

    start = next(
        (index for index, line in enumerate(lines) if FOOTER_PATTERN.match(line)),
        None,
    )
    if start is None:
        body = block.strip()
        return body or None, None

    body = "\n".join(lines[:start]).strip() or None
    footer: dict[str, str] = {}
    key: str | None = None

    for line in lines[start:]:
        match = FOOTER_PATTERN.match(line)
        if match:
            key = match.group("key")
            footer[key] = match.group("value").strip()
        elif not line.strip():
            key = None
        elif key is not None:
            footer[key] = f"{footer[key]}\n{line.strip()}"

    return body, footer
