"""
flexsched - flexible recurrence scheduling with jitter and time windows
"""

__version__ = "0.1.0"
__logo__ = "⏱"
