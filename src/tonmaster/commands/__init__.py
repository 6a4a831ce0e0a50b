"""
Commands - CLI implementations for the Master contract operations.

- deploy:   deploy the Master, sub-collections and items
- item:     transfer, edit and destroy items
- admin:    withdraw funds, update code, decode bodies
"""
