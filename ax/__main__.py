"""Allow running ax as ``python -m ax``."""

from ax.cli.main import app

app()
