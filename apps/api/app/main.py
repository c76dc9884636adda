import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import settings
from app.core.errors import register_error_handlers
from app.routers.auth import router as auth_router
from app.routers.kitchen_shifts import router as kitchen_shifts_router
from app.routers.members import router as members_router

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="Camp Kitchen Shifts API")

# Comma-separated list, e.g.:
# CORS_ORIGINS="http://localhost:3000,https://camp.example.org"
allow_origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]

# Safe fallback for local dev if env var not set
if not allow_origins:
  allow_origins = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
  ]

app.add_middleware(
  CORSMiddleware,
  allow_origins=allow_origins,
  allow_credentials=True,
  allow_methods=["*"],
  allow_headers=["*"],
)

register_error_handlers(app)

app.include_router(auth_router, prefix="/auth", tags=["auth"])
app.include_router(members_router, prefix="/members", tags=["members"])
app.include_router(kitchen_shifts_router, prefix="/kitchen-shifts", tags=["kitchen-shifts"])

@app.get("/health")
def health():
  return {"status": "ok"}
