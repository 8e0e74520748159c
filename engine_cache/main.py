# engine_cache/main.py
"""Main entry point for the engine-cache CLI application."""
from engine_cache.cli.interface import main_cli_group


def entrypoint():
    """Function to be called by the script defined in pyproject.toml."""
    main_cli_group(prog_name="engine-cache")

if __name__ == '__main__':
    entrypoint()
