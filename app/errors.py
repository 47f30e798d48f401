# app/errors.py


class TyperpunkError(Exception):
    """Base class for errors raised by the typing engine and its loaders."""


class InvalidText(TyperpunkError, ValueError):
    """Input text could not be decoded or contains malformed code points.

    Recoverable: the input buffer is left unchanged.
    """


class EmptyCorpus(TyperpunkError):
    """No passages are available, so a typing session cannot start."""


class CorpusLoadError(TyperpunkError):
    def __init__(self, path, reason: str):
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason
