"""mdcompose: compiles markdown templates by inserting reusable fragments."""

__version__ = "0.3.0"
