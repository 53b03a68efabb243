"""Module entrypoint for ``python -m sea``."""

from .cli import main


if __name__ == "__main__":
    main()
