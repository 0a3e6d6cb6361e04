"""Configuration, logging, persistence and session helpers."""
