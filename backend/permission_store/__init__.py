"""
Permission store package.

This package contains:
- settings: configuration loaded from the environment / .env
- logging_config: shared logging setup
- db: engine, session factory and cross-dialect column types
- models: SQLAlchemy models (Permission, UserPermission, User)
- repositories: query / commit helpers used by the services
- services: PermissionStore and the user collaborator
- cli: administrative command line entry point
"""
