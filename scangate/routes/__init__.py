# Routes package init
"""
ScanGate — API Routes Package
===============================

Route Inventory:
    - scan.py:   GET /testdb   (scan the configured table)

Routes are THIN: they resolve their dependencies, call the gateway and
return the success body. Failures are turned into responses by the
exception handlers in main.py.
"""
