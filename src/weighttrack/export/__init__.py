"""Export and formatting module."""
