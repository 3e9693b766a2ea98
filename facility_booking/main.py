import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from facility_booking.config import LOG_LEVEL, SEED_DATABASE
from facility_booking.routers import admin, auth, bookings, facilities
from facility_booking.db import SessionLocal, init_database
from facility_booking.seed import seed_database

# Configure logging
logging.basicConfig(level=LOG_LEVEL)


@asynccontextmanager
async def lifespan(_: FastAPI):
    "lifespan for initing database"
    init_database()
    if SEED_DATABASE:
        db = SessionLocal()
        try:
            seed_database(db)
        finally:
            db.close()
    yield


app = FastAPI(
    lifespan=lifespan,
    title="Facility booker",
    description="School facility booking with approval workflow and hourly availability.",
    version="0.1.0",
    license_info={
        "name": "MIT",
        "url": "https://opensource.org/licenses/MIT",
    },
)


app.include_router(auth.router)
app.include_router(facilities.router)
app.include_router(bookings.router)
app.include_router(admin.router)
