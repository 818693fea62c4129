"""Module entrypoint for ``python -m glossview``.

All argument parsing and runtime setup happen in ``glossview.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
