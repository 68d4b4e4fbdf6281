"""
Test suite for VerseKeeper.

Unit tests for the verse cache, daily verse selection, the bible-api.com
client and the supporting favorites, search and category services.

Author: Kasim Lyee <lyee@codewithlyee.com>
Company: Softlite Inc.
"""
