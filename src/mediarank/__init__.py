"""Media search and classification ranking engine."""

__version__ = "0.1.0"
