"""API Routes — one module per resource, each exporting an APIRouter."""
