"""
Business services for FunnelPress.
"""
