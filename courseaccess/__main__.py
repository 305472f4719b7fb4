"""
Package entry point.

Allows running the CLI via:

    python -m courseaccess

This simply forwards execution to courseaccess.cli.main().
"""

from courseaccess.cli import main

if __name__ == "__main__":
    main()
