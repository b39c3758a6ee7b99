"""CLI module for flexsched."""
