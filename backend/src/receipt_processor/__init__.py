"""
Receipt Processor - receipt submission and loyalty points scoring.
"""

__version__ = "0.1.0"
