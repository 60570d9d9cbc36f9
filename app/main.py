"""
----------------------------------------------------------------
# Copilot Webhook - FastAPI Application Entry Point
----------------------------------------------------------------
#
# A FastAPI application hosting the Copilot extension webhook.
#
# GitHub Copilot posts chat events to /copilot and reads the
# reply as an OpenAI-style Server-Sent-Event stream.
#
----------------------------------------------------------------
"""





"""
----------------------------------------------------------------
# MODULES AND IMPORTS
----------------------------------------------------------------
#
# In the first step we import the necessary modules.
#
#  - os is used for environment variable management
#  - fastapi is the web framework for building the API
#  - dotenv is used to load environment variables from a .env
#    file
#  - copilot_router is the router for the webhook endpoint
#  - get_package_version reports the installed version
#  - setup_logging and get_logger are utility functions for
#    logging setup
#
----------------------------------------------------------------
"""

import os
from fastapi import FastAPI
from dotenv import load_dotenv

from app.api.copilot import router as copilot_router
from app.config import get_package_version
from app.utils.logging import setup_logging, get_logger





"""
----------------------------------------------------------------
# APPLICATION INITIALIZATION
----------------------------------------------------------------
"""


"""
----------------------------------------------------------------
# STEP 1: Load Environment Variables
----------------------------------------------------------------
#
# This step loads environment variables from a .env file. The
# webhook secret and product identifier are read from them the
# first time a request needs the settings.
#
----------------------------------------------------------------
"""

load_dotenv()



"""
----------------------------------------------------------------
# STEP 2: Configure Logging
----------------------------------------------------------------
"""

setup_logging(level=os.getenv("LOG_LEVEL", "INFO"))
logger = get_logger(__name__)


"""
----------------------------------------------------------------
# STEP 3: Initialize FastAPI Application
----------------------------------------------------------------
"""

app = FastAPI(
    title="Copilot Webhook",
    description="GitHub Copilot extension webhook streaming chat completion chunks",
    version=get_package_version()
)


"""
----------------------------------------------------------------
# STEP 4: Register Routers
----------------------------------------------------------------
#
# This step registers the copilot router and a health endpoint
# for the hosting platform's probes.
#
----------------------------------------------------------------
"""

app.include_router(copilot_router)


@app.get("/health")
def health():
    """Report that the service is up."""
    return {"status": "ok", "version": app.version}


logger.info("Copilot webhook initialized successfully")




"""
----------------------------------------------------------------
# MAIN APPLICATION ENTRY POINT
----------------------------------------------------------------
"""

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", "8000")),
        reload=True,
        log_level="info"
    )
