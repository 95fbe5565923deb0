"""
Future Terminal - an animated sci-fi dashboard for the terminal.

The event loop and widget state machines live in this package and never
touch curses; futureterm.tui draws them.
"""

__version__ = "0.1.0"
