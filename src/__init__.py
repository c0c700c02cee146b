"""
Diploma Registry - Verifiable academic credentials on a shared ledger

An issuer records diplomas against holder addresses on an external
ledger; holders read their own. Any diploma can be exported as a
document carrying a fresh certificate: a random id, a fingerprint over
the diploma and that id, and a QR code pointing at a verification URL.

Layers:
- domain: records, roles, certificates, errors (no I/O)
- application: ports and services (identity, authorization, records,
  certificates, export, commands)
- infrastructure: adapters, stubs, observability
- bootstrap: wiring
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
