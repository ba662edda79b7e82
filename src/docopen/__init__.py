"""docopen: build package documentation and open it in a viewer."""

__version__ = "0.1.0"
