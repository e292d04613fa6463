"""Configuration loading, validation and key resolution."""
