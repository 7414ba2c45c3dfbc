#!/usr/bin/env python3
"""
run.py - Main entry point for connect4ai

Examples:
    python run.py play --difficulty hard --user "Ada Lovelace"
    python run.py stats "ada lovelace"
    python run.py leaderboard
    python run.py benchmark --games 20 --first hard --second medium
"""

import os
import sys

# Add the project root to Python path to ensure imports work
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from connect4ai.interfaces.cli import main

if __name__ == "__main__":
    sys.exit(main())
