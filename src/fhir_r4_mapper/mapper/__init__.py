"""Mapper module.

Vocabulary translation, birth date parsing and row-to-Patient mapping.
"""
