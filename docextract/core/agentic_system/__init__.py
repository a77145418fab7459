"""Agentic extraction components."""
