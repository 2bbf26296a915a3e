"""
ScanGate — Package Initializer
================================

A thin data-access gateway: one HTTP route that scans a DynamoDB table and
returns the items as JSON.

Architecture Note:

    ┌─────────────────────────────────────┐
    │        Routes (HTTP Router)         │  ← GET /testdb, status mapping
    ├─────────────────────────────────────┤
    │     Services (Table Gateway)        │  ← one Scan call, error collapse
    ├─────────────────────────────────────┤
    │     DynamoDB (external, aiobotocore)│
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
