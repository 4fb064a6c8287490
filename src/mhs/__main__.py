"""``python -m mhs`` — same as the ``mhs`` command."""

from mhs.cli import main

main()
