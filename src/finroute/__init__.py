"""finroute: natural-language routing over financial data APIs."""

__version__ = "0.1.0"
