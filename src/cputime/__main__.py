"""Entry point for ``python -m cputime``."""

from cputime.cli import run

if __name__ == "__main__":
    run()
