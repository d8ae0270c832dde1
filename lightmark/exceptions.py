"""
# Lightmark: exceptions.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Exception classes.
"""


class CommittedMutateException(Exception):
    pass


class MissingAttributeException(Exception):
    _missing_attribute: str

    def __init__(self, missing_attribute: str):
        super().__init__(f'error: mandatory attribute `{missing_attribute}` not set')
        self._missing_attribute = missing_attribute

    @property
    def missing_attribute(self) -> str:
        return self._missing_attribute


class SourceTransportException(Exception):
    """
    Raised when a source cannot be retrieved at all (as opposed to retrieved with a non-success status).
    """
    _identifier: str

    def __init__(self, identifier: str, message: str):
        super().__init__(message)
        self._identifier = identifier

    @property
    def identifier(self) -> str:
        return self._identifier


class UncommittedApplyException(Exception):
    pass
