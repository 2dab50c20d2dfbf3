"""Allow running toyen as ``python -m toyen``."""

from .cli import main

main()
