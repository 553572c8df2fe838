#!/usr/bin/env python3
"""Roadmap service - Run the application.

Usage:
    python run.py
    # Or: python -m src.app

The API will be available at http://localhost:5050/api
"""

from src.app import main

if __name__ == "__main__":
    main()
