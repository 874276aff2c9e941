"""
Auth Service package for the token gate.

This package exposes the FastAPI application that mints bearer tokens and
guards protected routes with them:

- app.main: Application entrypoint that wires routes and lifecycle.
- app.tokens: Signing key, claims model, token issuer and verifier.
- app.gate: The per-request authentication dependency.

Design notes:
- Keep the package import side-effects minimal; the signing key is read
  from configuration when the service is constructed, not at import time.
- Use the shared/ utilities for logging, metrics, config and errors.
- Treat this package as stateless; issued tokens are never stored.
"""
