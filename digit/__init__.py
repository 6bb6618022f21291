"""Command-line tool and client library for the DIGIT multi-tenant platform."""

__version__ = "0.1.0"
