"""Configuration, logging, security and error types."""
