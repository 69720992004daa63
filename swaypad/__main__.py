"""Allow `python -m swaypad`."""

from .command import main

if __name__ == "__main__":
    main()
