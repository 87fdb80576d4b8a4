"""Exceptions raised by the autofill package."""


class AutofillError(Exception):
    """Base class for autofill errors."""


class DocumentError(AutofillError):
    """A document could not be opened or read."""


class UnknownProfileKey(AutofillError):
    """A profile write named keys outside the recognized key set."""

    def __init__(self, keys):
        self.keys = sorted(keys)
        super().__init__(f"Unknown profile keys: {', '.join(self.keys)}")
