"""Application layer: portal use cases."""
