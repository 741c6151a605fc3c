"""GPX Activities - track metrics extraction for GPX activity imports."""

__version__ = "0.1.0"
