"""
Text helpers for verse display.

Author: Kasim Lyee <lyee@codewithlyee.com>
Company: Softlite Inc.
License: MIT
"""

import re

_WHITESPACE_RUN = re.compile(r'\s+')


def trim_verse(text: str) -> str:
    """
    Trim surrounding whitespace and collapse internal runs to single spaces.

    The API returns passage text with embedded newlines between verses;
    this produces a single display line.

    Example:
        >>> trim_verse("  For God so loved\\n the world \\n")
        'For God so loved the world'
    """
    return _WHITESPACE_RUN.sub(' ', text.strip())
