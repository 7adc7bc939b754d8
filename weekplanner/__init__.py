"""
weekplanner - week-long scheduling calendar built on a timeslot algebra.
"""

__version__ = "0.1.0"
