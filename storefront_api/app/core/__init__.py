"""Configuration, logging, store access and shared errors."""
