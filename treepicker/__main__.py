"""Module entrypoint for ``python -m treepicker``."""

from .cli import main


if __name__ == "__main__":
    main()
