"""
Boundary layer for external system integrations.

Handles all interactions with the psikotes REST backend and the in-process
query cache in front of it.
"""
