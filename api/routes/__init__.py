"""api/routes/ -- One APIRouter per resource, all mounted under /api by api/main.py."""
