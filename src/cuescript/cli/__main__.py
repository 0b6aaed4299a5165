"""Allow running the CLI with ``python -m cuescript.cli``."""

from cuescript.cli.main import main

if __name__ == "__main__":
    main()
