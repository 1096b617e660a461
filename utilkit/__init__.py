"""Helpers for text, collections, threads, files, shell commands, sockets and simple HTTP."""

__version__ = "1.0.0"