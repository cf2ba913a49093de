"""
Shared utilities for the Browser Gate.

This package aggregates common building blocks consumed by the service:

- config: Service and gate settings via pydantic-settings
- logging: Structured logging with request correlation
- metrics: Prometheus metrics helpers
- errors: Canonical error types and responses
- base_service: FastAPI service skeleton with health and metrics routes
- test_helpers: User-Agent samples and rule factories for tests

Only test_helpers reaches into the service package; the runtime modules
stay independent of it.
"""
