"""CLI module for resdk."""
