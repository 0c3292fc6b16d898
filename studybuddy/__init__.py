"""
StudyBuddy: a terminal study tracker.

Log study sessions, watch weekly progress against a goal, run a focus
timer and fetch a bit of motivation from the advice slip API.
"""

__version__ = "1.0.0"
