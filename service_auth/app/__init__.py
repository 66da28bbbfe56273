"""
Auth Service package for the Catalog Gateway.

This package exposes the FastAPI application for logging users in and
verifying the bearer tokens it issues. It is intentionally small:

- app.main: Application entrypoint that wires routes and lifecycle.
- app.accounts: Seeded demo account directory.
- app.validation: Token validation and user info shaping.

Design notes:
- Keep the package import side-effects minimal; module import must not
  perform network calls.
- Use the shared/ utilities for logging, metrics, tokens, and errors.
- There is no registration or persistent credential store; the account
  directory is fixed at startup.
"""
