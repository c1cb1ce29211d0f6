"""
------------------------------------------------------------------------------
Project:        NIDPro
File:           core/__init__.py
Version:        1.0.0
Producer:       thorsten.schnebeck@gmx.net
Generator:      Antigravity
Description:    Core logic package for NIDPro. Contains record models, AI
                extraction, batch ingestion, search, storage and export.
------------------------------------------------------------------------------
"""
