"""Storage access layer.

This module reads the on-disk store and splits tagged values.
It decodes JSON payloads into typed records for the readers.
"""
