"""
VerseKeeper - Daily scripture with a local verse cache.

Author: Kasim Lyee <lyee@codewithlyee.com>
Company: Softlite Inc.
License: MIT
"""

from .version import __version__, __author__, __email__, __company__

__all__ = ['__version__', '__author__', '__email__', '__company__']
