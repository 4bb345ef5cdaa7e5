"""Core building blocks: configuration, events, protocols and dispatch."""
