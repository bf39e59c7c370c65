"""
Utility helpers for the bonus points plugin.
"""
