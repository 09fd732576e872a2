#!/usr/bin/env python
"""
DragGesture - Main Entry Point
==============================
Run the drawing demo.
"""

from pathlib import Path

# Load environment variables from .env file
from dotenv import load_dotenv
load_dotenv(Path(__file__).parent / ".env")

from draggesture.ui import main

if __name__ == "__main__":
    main()
