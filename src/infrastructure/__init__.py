"""
Infrastructure layer - External adapters for the diploma registry.

This layer contains:
- QR and PDF rendering adapters (qrcode, reportlab)
- In-memory wallet and ledger stubs
- Observability (structlog configuration, correlation ids)

IMPORT RULES:
- CAN import from: domain, application
- Implements ports defined in application layer
"""
