"""Console log used by the validator."""

import sys


class BuildLog:
    """Prints info lines to stdout and warnings to stderr."""

    def info(self, msg: str):
        print(msg)

    def warn(self, msg: str):
        print(f"WARNING: {msg}", file=sys.stderr)
