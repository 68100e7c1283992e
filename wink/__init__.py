"""
wink — short command codes for Windows and WSL features and programs.
"""

__version__ = "0.1.0"
