"""Allow running as ``python -m testwave``."""

from .cli import main

if __name__ == "__main__":
    main()
