"""
Core utilities for FunnelPress.
"""
