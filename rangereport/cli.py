import functools
import sys
from pathlib import Path

import fncli

from .core.errors import ReportError
from .lib import ansi


@functools.cache
def _discover() -> None:
    fncli.autodiscover(Path(__file__).parent, "rangereport")


def main():
    _discover()
    if not sys.stdout.isatty():
        ansi.use(ansi.PLAIN)

    user_args = sys.argv[1:]
    if not user_args:
        user_args = ["report"]
    argv = ["rangereport", *user_args]
    try:
        code = fncli.dispatch(argv)
    except ReportError as e:
        sys.stderr.write(f"{e}\n")
        sys.exit(1)
    sys.exit(code)


if __name__ == "__main__":
    main()
