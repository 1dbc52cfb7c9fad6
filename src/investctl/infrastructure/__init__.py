"""Infrastructure layer — database engine and investment repositories.

This layer depends on stdlib, third-party libs (SQLAlchemy), and the
domain models it stores.  It must never import from services, commands,
or output.  The service layer talks to it only through the abstract
repository interface.
"""
