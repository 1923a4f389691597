"""Module entrypoint for ``python -m tabrecency``.

All argument parsing and runtime setup happen in ``tabrecency.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
