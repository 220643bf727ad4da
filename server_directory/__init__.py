from .app import app

from . import commands, views  # noqa: F401 (registers routes and commands)
