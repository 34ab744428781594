"""Allow ``python -m cnc_library``."""

from cnc_library.cli import run

run()
