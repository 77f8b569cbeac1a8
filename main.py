#!/usr/bin/env python3
"""
Campus Access Control - Main Entry Point
========================================

Students, lecturers and staff requesting access to campus facilities,
decided by an access-level policy plus explicit grants, with every
decision written to an audit trail.

Usage:
    python main.py --help            # Show available commands
    python main.py demo              # Reference walkthrough
    python main.py demo --record     # Same, also stored in the audit database
    python main.py check -p student -f laboratory
    python main.py levels            # Access level matrix
    python main.py scenario          # Scenario PASS/FAIL report
    python main.py audit logs        # Recorded audit trail
"""

import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from cli.main import app

if __name__ == "__main__":
    app()
