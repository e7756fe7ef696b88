"""Evaluator helper modules for the Monkey runtime."""

__all__ = [
    "blocks",
    "chains",
    "expr",
    "fn",
    "helpers",
    "objects",
]
