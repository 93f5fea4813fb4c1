"""Observability – structured logging for scheduling and dispatch events."""
