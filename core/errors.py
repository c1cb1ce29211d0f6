"""
------------------------------------------------------------------------------
Project:        NIDPro
File:           core/errors.py
Version:        1.0.0
Producer:       thorsten.schnebeck@gmx.net
Generator:      Antigravity
Description:    Exception hierarchy for the extraction adapter. Messages are
                shown to the user verbatim in the per-file progress list.
------------------------------------------------------------------------------
"""


class ExtractionError(Exception):
    """Raised when a document could not be turned into identity records."""


class MissingCredentialError(ExtractionError):
    """No API key is configured, the extraction service is unreachable."""

    MESSAGE = "System configuration missing: API Key not detected."

    def __init__(self, message: str = MESSAGE) -> None:
        super().__init__(message)


class MalformedResponseError(ExtractionError):
    """The model answered with something that is not a list of records."""
