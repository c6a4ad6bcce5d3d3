"""
                Cafe Waiter Order Taking API

A small order-taking backend for a café: tables, menu, orders and
bills kept in a single JSON document store.

Author: Cafe API Maintainers
Version: 1.0.0
License: MIT
"""

__version__ = "1.0.0"
__author__ = "Cafe API Maintainers"
