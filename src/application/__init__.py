"""
Application layer - Use cases and orchestration for the diploma registry.

This layer contains:
- Application services (identity resolution, record sync, commands, export)
- Port definitions (abstract interfaces for external collaborators)

IMPORT RULES:
- CAN import from: domain
- CANNOT import from: infrastructure, bootstrap
"""
