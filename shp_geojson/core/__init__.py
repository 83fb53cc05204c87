"""Core utilities and shared infrastructure.

- config: Conversion configuration and type-definition loading
- constants: Named constants (property keys, sentinels, CRS definitions)
- exceptions: Custom exception hierarchy
- status: Status sinks receiving stage progress and diagnostics
"""
