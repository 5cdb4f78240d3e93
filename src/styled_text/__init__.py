"""Styled Text - regex-rule text styling with inline image placeholders."""

__version__ = "0.1.0"
