"""
Command line:

    python -m hypermark [FILE ...]

Renders every FILE (or standard input, if no files are given or FILE is "-") to HTML on standard output.
Errors are reported on standard error, with exit status 1; the remaining files are still processed.
"""

import sys

from hypermark.errors import ParseFailure
from hypermark.parser import compile


def main(paths):
    status = 0
    for path in paths or ['-']:
        try:
            if path == "-":
                source = sys.stdin.read()
            else:
                with open(path, encoding = "utf-8") as f:
                    source = f.read()
            print(compile(source))
        except (ParseFailure, OSError, UnicodeDecodeError) as ex:
            print(f"{path}: {ex}", file = sys.stderr)
            status = 1
    return status


if __name__ == '__main__':
    sys.exit(main(sys.argv[1:]))
