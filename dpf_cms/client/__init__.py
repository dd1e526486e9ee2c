"""
Async client for the DPF CMS API.
"""

from .bulk import BulkRunResult, run_with_concurrency
from .client import CmsApiClient
from .errors import CmsApiError, flatten_errors

__all__ = ["BulkRunResult", "CmsApiClient", "CmsApiError", "flatten_errors", "run_with_concurrency"]
