"""
frs: build shell commands out of composable contexts.

A context wraps the command you eventually run with a working directory,
PATH entries, environment variables, containers or leading commands, and
keeps a log of every step applied to it.
"""

__version__ = "0.1.0"
