"""Allow ``python -m mygit``."""

from mygit.cli.main import app

app()
