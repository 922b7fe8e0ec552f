"""
Domain package - Core business logic with no external dependencies.

This package contains pure Python receipt models and the points rules
that turn a submitted receipt into a loyalty score.
"""
