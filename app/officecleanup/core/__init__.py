"""Core infrastructure: paths, host detection and theming."""
