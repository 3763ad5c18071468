"""Command line interface for devbridge."""
