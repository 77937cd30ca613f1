# ============================================================================
# src/bia_ingestion/extractors/patterns.py
# ============================================================================
"""
OCR-tolerant regex fragments.

The scale prints "lb" and "%" in a small font that OCR routinely mangles:
- lb  -> Ib, |b, 1b, |p, lp
- %   -> 0/0, o/o

Values on the report carry at most one decimal place, so number fragments
stop after one decimal digit. That lets a trailing "1b" glyph be read as the
unit instead of an extra digit ("171.21b" -> 171.2 lb).
"""

# Bare unit glyph for pounds, for spots where a label may follow without a space
LB_GLYPH = r'[lI|1]?[bp]'

# Unit glyph for pounds. Not followed by a letter, so "172 Body" is not "172 B".
LB = LB_GLYPH + r's?(?![a-z])'

# Percent glyph
PCT = r'(?:%|0/0|o/o)'

# Unsigned value with an optional single decimal digit
NUM = r'\d+(?:\.\d)?'

# Signed value, OCR may insert a space after the sign
SIGNED_NUM = r'[+-]?\s?\d+(?:\.\d)?'

# Loose detectors used to pick candidate lines in segmental sections
LB_TOKEN = r'[1Il|][bp]|lb|Ib|\|b|\|p'
PCT_TOKEN = r'%|0/0|o/o'

# Region markers printed before the pounds value in segmental tables
SEGMENT_MARKER = r'[@®©⊕]'
