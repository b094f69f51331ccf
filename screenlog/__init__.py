"""
ScreenLog - Personal Screen Time Tracker

A self-hosted Python system for logging app and device usage,
setting daily limits, and reviewing where the time went.

Nothing is tracked automatically. Every minute is entered by hand.
"""

__version__ = "0.1.0"
