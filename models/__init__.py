"""
models/ - Domain Layer
======================
Plain dataclasses for users, menu items, orders and item statuses.
"""
