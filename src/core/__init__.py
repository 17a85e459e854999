"""Core: configuration, domain, interfaces and the capture pipeline.

Nothing here performs HTTP directly; adapters implement the interfaces.
"""
