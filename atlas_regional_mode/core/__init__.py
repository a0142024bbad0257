"""Core utilities and shared infrastructure.

- config: Configuration loading and validation
- constants: Named constants, API paths, status vocabulary
- exceptions: Custom exception hierarchy
"""
