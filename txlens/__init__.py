"""txlens - decode and enrich the event logs of an Ethereum transaction."""

__version__ = "0.1.0"
