"""Turn-based wild creature battles: engine, data and a terminal front end."""

__version__ = "0.1.0"
