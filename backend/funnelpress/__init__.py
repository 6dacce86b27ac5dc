"""
FunnelPress: multi-tenant content and conversion-funnel backend.
"""
