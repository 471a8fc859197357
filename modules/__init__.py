"""
Application Modules.

- backend/: Note lifecycle service, stores, schemas, configuration
- cli/: Command-line client (Typer + Rich)
"""
