"""
Configuration package.

- constants: wire format, account layout and lookup service constants
- settings: environment-backed Settings (import from distributor.config.settings)
"""
