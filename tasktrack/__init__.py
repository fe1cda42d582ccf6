"""A command-line task tracker that stores tasks in a JSON file."""

__version__ = "0.1.0"