"""
Pydantic schemas for the FunnelPress API.
"""
