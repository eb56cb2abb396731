"""Entry point for 'python -m prohelper' command."""

from prohelper.cli import main

if __name__ == "__main__":
    main()
