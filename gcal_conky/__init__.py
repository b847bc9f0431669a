"""
gcal-conky - calendar grid and upcoming Google Calendar events for conky.
"""

__version__ = "0.1.0"
