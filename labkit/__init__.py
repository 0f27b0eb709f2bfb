"""Allocator trace parsing, K-best timing, robust I/O, and command-line parsing with history."""

__version__ = "0.1.0"