"""Builders for configuration payloads and gateway instances."""
