"""Module entrypoint for `python -m ghsponsors`.

It forwards to the same main() function as the console script.

Usage:
    ```bash
    python -m ghsponsors list octocat --json login
    ```
"""

from .cli import main

if __name__ == "__main__":
    main()
