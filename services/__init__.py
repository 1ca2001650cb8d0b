"""
services/ - Business Logic Layer
================================
Each service validates input, applies role rules and talks to repositories.
Services return user-facing messages; handlers only print them.
"""
