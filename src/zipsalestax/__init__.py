"""ZIP-based US sales tax rates for checkout tax pipelines."""

__version__ = "0.2.2"
