"""
Shared Domain Module
====================

Session lifecycle business logic.
"""
