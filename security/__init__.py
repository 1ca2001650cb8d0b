"""
security/ - Access Control
==========================
Role guard for menu actions and failed-login throttling.
"""
