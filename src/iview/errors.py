# src/iview/errors.py
"""Errors raised by iview."""


class ViewerError(RuntimeError):
    pass


class MissingApplication(ViewerError):
    """%a が使われたのにアプリケーションのパスが無い"""

    def __init__(self, message: str = "No ImageJ/Fiji application found."):
        super().__init__(message)


class TempDirectoryNotFound(ViewerError):
    pass


class ViewerLaunchError(ViewerError):
    pass


class TempFileWriteError(ViewerError):
    pass
