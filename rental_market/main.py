# rental_market/main.py

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from rental_market.config import ALLOWED_ORIGINS
from rental_market.logging_config import setup_logging
from rental_market.middleware import RequestIDMiddleware
from rental_market.routes.availability import router as availability_router
from rental_market.routes.favorites import router as favorites_router
from rental_market.routes.health import router as health_router
from rental_market.routes.listings import router as listings_router
from rental_market.routes.metrics import router as metrics_router
from rental_market.routes.reservations import router as reservations_router
from rental_market.routes.trips import router as trips_router
from rental_market.routes.users import router as users_router

# Initialize structured logging
setup_logging()
logger = structlog.get_logger(__name__)

app = FastAPI(
    title="Rental Market API",
    description="Short-term rental marketplace: listings, bookings and host calendars",
    version="1.0.0",
)

app.add_middleware(RequestIDMiddleware)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS if "*" not in ALLOWED_ORIGINS else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(health_router, tags=["Health"])
app.include_router(metrics_router, tags=["Metrics"])
app.include_router(users_router, tags=["Users"])
app.include_router(listings_router, tags=["Listings"])
app.include_router(reservations_router, tags=["Reservations"])
app.include_router(trips_router, tags=["Trips"])
app.include_router(availability_router, tags=["Availability"])
app.include_router(favorites_router, tags=["Favorites"])


@app.on_event("startup")
def startup_event() -> None:
    """Log application start."""
    logger.info("FastAPI application starting up...")
