import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from gift_lookup.api import gift_lookup

log_level_name = os.getenv("LOG_LEVEL", "INFO").upper()
log_level = getattr(logging, log_level_name, logging.INFO)
if not logging.getLogger().handlers:
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

logging.getLogger("gift_lookup").setLevel(log_level)

app = FastAPI(
    title="Gift Message Lookup",
    description="Storefront endpoint that finds the gift message on a customer's most recent order",
    version="1.0.0"
)

# Embedded in the storefront, so any origin may call it
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type"],
)

app.include_router(gift_lookup.router)

@app.get("/health")
def health_check():
    return {"status": "healthy"}
