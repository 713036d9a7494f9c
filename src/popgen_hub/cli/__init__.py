"""Command line interface for Population Genetics Hub."""
