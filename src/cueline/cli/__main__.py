"""Allow running the CLI with ``python -m cueline.cli``."""

from cueline.cli.main import main

if __name__ == "__main__":
    main()
