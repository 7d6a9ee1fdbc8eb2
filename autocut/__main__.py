"""Package entry point for ``python -m autocut``.

WHY: Python's ``-m`` flag looks for ``__main__.py`` inside the package and
executes it. Delegates straight to the CLI's main().
"""

from autocut.cli import main

if __name__ == "__main__":
    main()
