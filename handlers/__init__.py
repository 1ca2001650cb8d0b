"""
handlers/ - Presentation Layer
================================
Console menu actions. Each handler prompts for input,
delegates to the appropriate Service, and prints the result.
No business logic lives here.
"""
