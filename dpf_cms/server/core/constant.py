"""Static values shared by the FastAPI application."""

PROJECT_NAME = "DPF CMS"
API_V1_STR = "/api/v1"
STORAGE_URL_PATH = "/storage"
