"""Module entrypoint for `python -m alkon`.

It forwards to the same main() function as the ``alkon`` console script.

Usage:
    ```bash
    python -m alkon --list
    python -m alkon --tool-chest=~/src --fzf
    ```
"""

from .cli import main

if __name__ == "__main__":
    main()
