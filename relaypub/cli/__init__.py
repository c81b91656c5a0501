"""Relaypub CLI — Typer-based command-line interface.

Provides the ``relaypub`` command with subcommands for running a release,
listing the manifest history, and previewing the next version.

All output uses Rich for formatted terminal display.
"""
