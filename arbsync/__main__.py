"""Allow `python -m arbsync`."""

from arbsync.main import run

run()
