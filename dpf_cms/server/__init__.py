"""
DPF CMS Server Package.

This package contains the web server implementation for the DPF CMS platform.
It includes the API definition, authentication, core service logic, and configuration.

Subpackages:
    api: FastAPI route definitions grouped by role.
    core: Configuration, constants and authentication dependencies.
    services: Business logic (reports, exports, task rules, notifications, storage).
    middleware: Request tracing middleware.
    exception_handlers: JSON error responses for validation and unhandled errors.
"""
