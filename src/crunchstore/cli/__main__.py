"""Allow running the CLI with python -m crunchstore.cli."""

from crunchstore.cli import main

main()
