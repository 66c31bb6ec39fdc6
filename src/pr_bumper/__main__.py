"""Allow running pr-bumper as ``python -m pr_bumper``."""

from pr_bumper.cli import main

if __name__ == "__main__":
    main()
