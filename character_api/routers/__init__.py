"""
FastAPI routers grouped by resource (projects, characters, images, users,
upload, health).

Each module exposes an APIRouter included by the app factory. Endpoints stay
thin: they validate the body shape and delegate to a service.
"""
