"""Console client for a music library server: log in, list songs and play them."""

__version__ = "0.1.0"