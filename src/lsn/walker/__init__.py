"""Directory traversal driven by an entry filter pipeline.

This package provides the Walker that visits the entries beneath a root directory,
along with the entry record it hands to filters and its permission-handling options.
"""
