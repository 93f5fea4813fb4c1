"""Application layer – scheduling engine, lifecycle coordination and the runner."""
