"""Module entrypoint for ``python -m foldscroll``.

All argument parsing happens in ``foldscroll.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
