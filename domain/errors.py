# -*- coding: utf-8 -*-


class BookmarkError(Exception):
    """Base class for recoverable bookmark failures shown to the user."""


class ValidationError(BookmarkError):
    pass


class CapacityError(BookmarkError):
    pass


class FormatError(BookmarkError):
    pass
