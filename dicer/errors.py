from __future__ import annotations


class DicerError(Exception):
    """Base class for errors raised by the game service."""


class PersistenceUnavailable(DicerError):
    """The session store could not be read or written; nothing was applied."""


class SessionBusy(DicerError):
    """Another state-changing operation holds the session lock."""


class CorruptBoardError(DicerError, ValueError):
    """A stored board does not have 16 cells with one bonus marker and each prize once."""
