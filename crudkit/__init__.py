"""
crudkit: modular web-application scaffold.

Generic CRUD data access driven by GraphQL field selections, feature module
registration for a FastAPI shell app, and a generator for new modules.
"""

__version__ = "0.1.0"
