"""Core: configuration, errors, wire models and the command generator.

Nothing here performs I/O directly; requests go through a `Transport`.
"""
