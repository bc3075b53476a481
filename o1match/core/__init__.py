"""Core business logic: matching engine and service errors."""
