"""Bundled data files for officecleanup."""
