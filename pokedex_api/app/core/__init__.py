"""Core infrastructure: configuration, logging, MongoDB access and errors."""
