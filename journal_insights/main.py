"""
main.py - FastAPI application entrypoint for the Journal Insights function

Purpose:
- Exposes the insights workflow as a callable function:
    POST /addInsights  {"data": ...}  ->  {"result": {"message": ...}}
  The request payload and the invocation context are not used by the workflow.
- Orchestrates the pipeline:
    list users -> fetch journals -> per-user model call -> one batched Firestore write

Design/behavioral notes:
- The Firestore client and the InsightClient are created once at startup and
  reused by every invocation. Startup fails if the API key is missing.
- Any failure inside an invocation is logged with full detail, but the caller
  only ever sees the generic "internal" error.
"""

import os
import logging
from datetime import datetime
from typing import Any, Dict, Optional

import pytz

from fastapi import Body, FastAPI
from fastapi.responses import JSONResponse
from google.cloud import firestore

from .config import load_settings
from .errors import ConfigurationError, InternalError
from .gcp_clients import get_firestore_client
from .insight_client import InsightClient
from .insights import generate_user_insights
from .journals import write_insights

# Configure logging (configurable via LOG_LEVEL env var)
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
_logger = logging.getLogger(__name__)

app = FastAPI(title="Journal Insights")

SUCCESS_MESSAGE = "Insights added successfully."

# Process-wide clients, populated by the startup hook
firestore_client: Optional[firestore.Client] = None
insight_client: Optional[InsightClient] = None
chat_model: Optional[str] = None


def add_insights(db: firestore.Client, client: InsightClient) -> Dict[str, str]:
    """
    Run one invocation: generate insights for every user with journals and
    store them in a single batch.

    Raises:
        InternalError: on any failure. The original error is only logged.
    """
    try:
        insights_list = generate_user_insights(db, client)
        write_insights(db, insights_list)
        return {"message": SUCCESS_MESSAGE}
    except Exception as e:
        _logger.exception("Error adding insights: %s", e)
        raise InternalError("Failed to add insights.") from e


@app.on_event("startup")
def startup_event():
    """
    Build the shared clients. Raises ConfigurationError (aborting startup)
    when the API key is missing or Firestore cannot be reached.
    """
    global firestore_client, insight_client, chat_model

    settings = load_settings()
    db = get_firestore_client(settings.gcp_project)
    if db is None:
        raise ConfigurationError("Could not initialize the Firestore client.")

    firestore_client = db
    insight_client = InsightClient.from_settings(settings)
    chat_model = settings.chat_model
    _logger.info("Journal Insights started (model=%s)", chat_model)


@app.on_event("shutdown")
def shutdown_event():
    global insight_client
    if insight_client is not None:
        insight_client.close()
        insight_client = None


@app.post("/addInsights")
def add_insights_endpoint(payload: Optional[Dict[str, Any]] = Body(default=None)):
    """
    Callable-function endpoint. `payload` (usually {"data": ...}) is accepted
    and ignored.

    Returns 200 {"result": {"message": ...}} on success and
    500 {"error": {"status": "INTERNAL", "message": ...}} on any failure.
    """
    if firestore_client is None or insight_client is None:
        _logger.error("addInsights called before the clients were initialized.")
        error = InternalError()
    else:
        try:
            return {"result": add_insights(firestore_client, insight_client)}
        except InternalError as e:
            error = e

    return JSONResponse(
        status_code=500,
        content={"error": {"status": error.code.upper(), "message": error.message}},
    )


@app.get("/health")
def health_check():
    """
    Simple health endpoint: reports the configured model and whether Firestore is available.
    """
    return {
        "status": "healthy", "timestamp": datetime.now(pytz.utc).isoformat(),
        "model": chat_model, "firestore_available": firestore_client is not None,
    }


# -------------------------
# Run with Uvicorn when executed directly
# -------------------------
if __name__ == "__main__":
    import uvicorn
    port = int(os.environ.get("PORT", 8000))
    uvicorn.run("journal_insights.main:app", host="0.0.0.0", port=port)
