"""
NoteKeeper Backend - personal note storage with optimistic concurrency

Version: 1.0.0
"""

__version__ = "1.0.0"
