"""
LentGreen - Source Package

A personal debt tracker: money owed to you and by you, organized by
person, with partial repayments and simple statistics.

DESIGN PRINCIPLES:
1. One store owns all data; everything else asks it
2. Bad input is reported, never silently fixed
3. Every change is persisted and logged
4. Storage and reminders are swappable collaborators
"""

__version__ = "1.0.0"
__author__ = "LentGreen Team"
