"""
Feature modules for Pumpfoil.

Each feature is a self-contained module with:
- types.py - Domain dataclasses
- schemas.py - Pydantic schemas
- engine.py / service code - Business logic
"""
