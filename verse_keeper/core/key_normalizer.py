"""
Cache key derivation for passage references.

Author: Kasim Lyee <lyee@codewithlyee.com>
Company: Softlite Inc.
License: MIT
"""


def normalize_reference(reference: str) -> str:
    """
    Derive the cache key for a reference.

    Lower-cases the reference, removes space characters and replaces
    ``:`` with ``_``. Only references that differ in case or spacing share a
    key; other whitespace (tabs, newlines) is kept. An empty reference yields
    an empty key, so callers reject blank input first.

    Args:
        reference: Reference as typed by the user

    Returns:
        Normalized key

    Example:
        >>> normalize_reference("John 3:16")
        'john3_16'
    """
    return reference.lower().replace(" ", "").replace(":", "_")
