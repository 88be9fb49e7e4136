"""Core services: configuration, logging and the exception hierarchy."""
