"""Module entrypoint for ``python -m multiflexi_tui``.

All argument parsing and runtime setup happen in ``multiflexi_tui.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
