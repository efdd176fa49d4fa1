"""
Community Maintenance Ledger - Source Package

Persistence and reporting engine for a small community finance tracker:
flats pay maintenance (income), the committee pays bills (expenses).

DESIGN PRINCIPLES:
1. One JSON file is the whole database
2. Missing or corrupt data degrades to safe defaults, never a crash
3. Every mutation is auditable
4. Storage is injected, never ambient
"""

__version__ = "1.0.0"
__author__ = "Community Maintenance Team"
