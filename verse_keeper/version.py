"""Version information for VerseKeeper."""

__version__ = "1.0.0"
__author__ = "Kasim Lyee"
__email__ = "lyee@codewithlyee.com"
__company__ = "Softlite Inc."
