"""
Browser Gate service package.

The gate sits in front of application routes and decides, per request,
whether the calling browser is supported:

- app.rules: version comparison, rule models and the ordered rule set.
- app.domain: gate configuration (builder and frozen snapshot) and the
  per-request decision.
- app.useragent: User-Agent parsing into browser descriptors.
- app.middleware: Starlette middleware that annotates and redirects.
- app.main: FastAPI service wiring.
"""
