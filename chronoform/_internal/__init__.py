"""Internal implementation details for chronoform.

This package contains the calendar and timezone collaborators used by the
parser and formatter. Nothing here is part of the public API.
"""
