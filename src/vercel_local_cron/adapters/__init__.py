"""Adapters – HTTP dispatch and dev server process integration."""
