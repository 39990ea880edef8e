"""Core configuration and shared types."""
