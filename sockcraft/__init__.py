"""Socket servers and clients (UDP chat, TCP commands, calculator, HTTP) and their shared utilities."""

__version__ = "0.1.0"