"""Table readers.

This module turns raw table entries into typed records.
Each reader owns its table's record shape and validation rules.
"""
