"""Application layer: ports and use cases orchestrating the transports."""
