"""Command-line tools (`python -m tasky.tools.<name>`)."""
