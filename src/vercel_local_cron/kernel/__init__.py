"""Kernel – errors and time primitives shared by every layer."""
