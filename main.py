"""Entrypoint running the search CLI."""

import sys

from ytsearch_cli.cli import run_cli


def main():
    sys.exit(run_cli())


if __name__ == "__main__":
    main()
