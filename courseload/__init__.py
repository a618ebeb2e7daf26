"""Relational persistence core for the course catalog."""
