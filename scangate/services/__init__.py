# Services package init
"""
ScanGate — Services Layer
===========================

Service Inventory:
    - TableGateway (abstract): contract used by the router
    - DynamoDBGateway: aiobotocore implementation of TableGateway
"""
