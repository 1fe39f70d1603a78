"""officecleanup - Audit and remove Microsoft Office leftovers on macOS."""

__version__ = "1.5.0"
