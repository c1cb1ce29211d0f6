"""
------------------------------------------------------------------------------
Project:        NIDPro
File:           core/models/__init__.py
Version:        1.0.0
Producer:       thorsten.schnebeck@gmx.net
Generator:      Antigravity
Description:    Package initializer for core data models. Exports the identity
                record, search filters and progress entities.
------------------------------------------------------------------------------
"""

from .types import FileStatus, SourceType
from .record import FileProgress, IdentityRecord, SearchFilters
