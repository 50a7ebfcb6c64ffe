"""Allow `python -m afritest`."""

import sys

from .cli import main

main(sys.argv[1:])
