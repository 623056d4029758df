"""
Services module for business logic separation.

This module contains service classes that encapsulate the redirect,
event logging and reporting logic, keeping it separate from API endpoints
and database models.
"""
