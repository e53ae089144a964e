"""Module entrypoint for ``python -m ccexp``."""

from .cli import main


if __name__ == "__main__":
    main()
