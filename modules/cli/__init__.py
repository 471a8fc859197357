"""
CLI Client Module.

Command-line presentation layer built with Typer and Rich.

Architecture:
- CLI is a thin presentation layer
- All note lifecycle logic lives in modules.backend.services.note
- Each command opens the configured stores, synchronizes, then acts

Usage:
    python cli.py --help
    python cli.py notes list
    python cli.py notes create --name "Groceries" --image cat.png
"""
