"""Core pipeline for pricesync."""
