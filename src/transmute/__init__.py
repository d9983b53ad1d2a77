"""transmute: declarative JSON modify transforms with function expressions."""

__version__ = "0.1.0"
