"""Entry point for `python -m tdeskdroid`."""

import sys


def main():
    from tdeskdroid.app import run_app
    sys.exit(run_app())


if __name__ == "__main__":
    main()
