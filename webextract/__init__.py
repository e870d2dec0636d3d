"""Company and product data extraction from web pages, with tracked status."""

__version__ = "0.1.0"
