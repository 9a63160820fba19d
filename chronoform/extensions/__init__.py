"""Custom syntaxes built on the chronoform extension point.

Each module exposes a Syntax object and a register() function; nothing is
registered on import.
"""
