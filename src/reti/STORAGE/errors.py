# STORAGE/errors.py
from typing import Optional


class RetiError(Exception):
    """Base class for every failure raised by reti."""


class ParseError(RetiError):

    def __init__(
            self,
            message: Optional[str] = None,
            text: Optional[str] = None,
            token: Optional[str] = None,
            line: Optional[int] = None,
    ):
        super().__init__(message)
        self.message = message
        self.text = text
        self.token = token
        self.line = line

    def __str__(self):
        pieces = ['Parse error']
        if self.line is not None:
            pieces.append(f' at line {self.line}')
        if self.message is not None:
            pieces.append(f': {self.message}')
        if self.token is not None:
            pieces.append(f' (token {self.token!r})')
        if self.text is not None:
            pieces.append(f': {self.text!r}')
        return ''.join(pieces)


class InvalidQueryError(RetiError, ValueError):
    """A week/month key that cannot name any period, e.g. month 13."""


class StorageError(RetiError):
    pass


class SnapshotIOError(StorageError):
    pass


class SnapshotFormatError(StorageError):
    pass


class EditorError(RetiError):
    pass
