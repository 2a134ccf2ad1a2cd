"""Application layer: ports and use cases built on the domain operations."""
