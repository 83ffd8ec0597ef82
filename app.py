#!/usr/bin/env python3
"""
Main entry point for URL expander service.

Usage:
    python app.py

See url_expander/server.py for the environment variables.
"""

from url_expander.server import main


if __name__ == "__main__":
    main()
