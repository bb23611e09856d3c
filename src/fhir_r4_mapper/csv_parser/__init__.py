"""CSV parser module.

Positional column layout, streaming loader and malformed-row export for
Synthea patients.csv files.
"""
