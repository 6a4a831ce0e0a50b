"""
Wrappers - typed message builders for the Master contract family.

- opcodes: 32-bit operation tags
- content: item metadata dictionaries (TEP-64)
- bodies:  message body builders and parsers
- master:  the Master contract handle and its send_* operations
"""
