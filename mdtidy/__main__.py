"""Module entrypoint for running mdtidy as ``python -m mdtidy``."""

from __future__ import annotations

from mdtidy.cli import main


if __name__ == "__main__":
    main()
