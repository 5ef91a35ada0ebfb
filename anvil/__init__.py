"""Anvil -- interactive scaffolder for multi-module Spring Boot projects."""

__version__ = "0.1.0"
