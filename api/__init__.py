"""api/ -- HTTP layer: FastAPI app, request/response models, and routes.

Layer rule: api/ may import from auth/, core/, and portal/.
Nothing imports from api/.
"""
