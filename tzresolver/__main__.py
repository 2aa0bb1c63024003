"""Entry point for `python -m tzresolver` command."""

import sys

from tzresolver.cli import main_entry
from tzresolver.timezone.exceptions import TimezoneError


def main() -> None:
    """Entry point for python -m tzresolver and the console script."""
    try:
        sys.exit(main_entry())
    except KeyboardInterrupt:
        print("Operation cancelled by user")
        sys.exit(130)
    except TimezoneError as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
