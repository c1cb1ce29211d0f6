"""
------------------------------------------------------------------------------
Project:        NIDPro
File:           core/ai/__init__.py
Version:        1.0.0
Producer:       thorsten.schnebeck@gmx.net
Generator:      Antigravity
Description:    Package for AI-related components: the extraction adapter
                interface, prompts and the Gemini implementation.
------------------------------------------------------------------------------
"""

from .base import ExtractionAdapter
from .gemini_extractor import GeminiExtractor
