"""
Adapter implementations for SkyPath.

Adapters are concrete implementations of the port interfaces.
They handle the specifics of data sources, indexing and algorithms.
"""
