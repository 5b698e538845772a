"""
Core modules for Lab Tools.

This package contains the terminal-independent logic for log
classification, time-range search, and matrix arithmetic.
"""
