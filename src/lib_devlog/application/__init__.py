"""Application layer: ports and use cases of the rendering engine."""
