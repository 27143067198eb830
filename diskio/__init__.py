"""Nagios-style block device I/O check."""

__version__ = "0.1.0"
