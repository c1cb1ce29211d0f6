"""
------------------------------------------------------------------------------
Project:        NIDPro
File:           core/ai/prompts.py
Version:        1.0.0
Producer:       thorsten.schnebeck@gmx.net
Generator:      Antigravity
Description:    Centralized storage for AI instructions and the response
                schema of the identity record extraction.
------------------------------------------------------------------------------
"""

from google.genai import types

PROMPT_IDENTITY_EXTRACTION = """
=== [SYSTEM INSTRUCTION] ===

You are an Identity Record Extraction Engine.

### TASK
Extract identity details from the provided document. Many documents will be Bengali NIDs or Voter Lists.

### REQUIREMENTS
1. BILINGUAL EXTRACTION: For Name, Father, Mother, and Address, provide BOTH the original Bengali text and a transliterated English version.
2. NUMBERS & DIGITS: Convert ALL Bengali digits (০-৯) found in NID numbers, Voter Serial numbers, and Dates to standard English digits (0-9).
3. SERIAL NUMBERS: Explicitly look for 'Voter Serial', 'Serial No', or 'ক্রমিক নং' and extract it into the voterSerial field.
4. BLOOD GROUP: Identify and extract blood group if visible.
5. VOTER LISTS: If this is a list, extract every unique person as a separate object in the array.
6. OUTPUT: Return a JSON array matching the schema.
"""


def _text(description: str) -> types.Schema:
    return types.Schema(type=types.Type.STRING, description=description)


IDENTITY_RESPONSE_SCHEMA = types.Schema(
    type=types.Type.ARRAY,
    items=types.Schema(
        type=types.Type.OBJECT,
        properties={
            "fullNameEn": _text("Name in English."),
            "fullNameBn": _text("Name in Bengali."),
            "fatherNameEn": _text("Father's name in English."),
            "fatherNameBn": _text("Father's name in Bengali."),
            "motherNameEn": _text("Mother's name in English."),
            "motherNameBn": _text("Mother's name in Bengali."),
            "addressEn": _text("Address in English."),
            "addressBn": _text("Address in Bengali."),
            "bloodGroup": _text("Blood group (e.g. A+, B-)."),
            "voterSerial": _text("Voter Serial Number or Serial No."),
            "nidNumber": _text("NID Number (English digits)."),
            "dateOfBirth": _text("DOB (YYYY-MM-DD)."),
        },
        required=["fullNameEn", "fullNameBn", "nidNumber", "dateOfBirth"],
    ),
)
