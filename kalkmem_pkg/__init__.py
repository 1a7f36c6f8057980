"""Memory calculator package: number parser, arithmetic engine, session loop, and CLI."""

__all__ = [
    "config",
    "parser",
    "engine",
    "session",
    "cli",
    "types",
    "logging_config",
]
