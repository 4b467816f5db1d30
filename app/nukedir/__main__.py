"""Allow running nukedir as ``python -m nukedir``.

The privilege check re-invokes the program this way under sudo.
"""

from nukedir.cli.main import run

if __name__ == "__main__":
    run()
