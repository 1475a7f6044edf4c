"""
Todo API

Multi-tenant to-do list service with JWT bearer authentication.
"""
