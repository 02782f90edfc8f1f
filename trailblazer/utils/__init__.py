"""Configuration, logging, errors, SQL and security helpers."""
