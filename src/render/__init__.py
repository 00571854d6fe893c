"""Plain-text report rendering.

This module formats decoded records for terminal output.
"""
