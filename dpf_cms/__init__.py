"""DPF CMS.

Backend for a donation and content-management platform run by an NGO.

High-level architecture
-----------------------

- ``dpf_cms.core``: logging, monitoring, the database layer (SQLModel entities
  and async repositories), domain enums, API I/O schemas and small shared
  helpers such as display-order assignment.
- ``dpf_cms.server``: the FastAPI application. Routers are grouped by role
  (``/editor``, ``/admin``, ``/superadmin``) plus a public read-only surface.
- ``dpf_cms.client``: an async HTTP client for the API, including the bounded
  worker pool used for bulk operations.
"""

__version__ = "0.1.0"
