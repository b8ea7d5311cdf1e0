"""Configuration: environment settings and JSON config loading."""
