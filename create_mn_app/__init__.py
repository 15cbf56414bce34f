"""create-mn-app: scaffold Midnight Network applications from starter templates."""

__version__ = "0.1.0"
