"""Core model of a background job runner: terminal lines, wrapping, scrolling, jobs, commands, ignore rules and watching."""

__version__ = "0.1.0"