"""Main entry point for the cinema CLI when run as a module."""

from chatcinema.cli.main import main

if __name__ == "__main__":  # pragma: no cover
    main()
