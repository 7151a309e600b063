"""Module entrypoint for ``python -m tripane``.

All argument parsing and runtime setup happen in ``tripane.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
