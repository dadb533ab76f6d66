"""Validation utilities.

This package contains the non-interactive regression check that compares a
simulate-vis run against a baseline directory.

Design goals
------------
1) Keep the comparison core free of console and exit-code handling.
2) Make runs reproducible and scriptable (CLI-style entry point).
3) One explicit anomaly policy instead of separate strict/lenient tools.
"""
