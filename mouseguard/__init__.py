"""
Mouse Guard - keeps the cursor off a chosen display in multi-monitor setups.
"""

__version__ = "1.0.0"
