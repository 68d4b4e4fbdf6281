"""Verse caching, daily verse selection and related services."""
