"""
Example: Relay in front of an existing FastAPI app

Every request is decided by the configured endpoint first. When the
directive does not end the cycle (for example ``{"status": "none"}``), the
request continues to the application routes below.

Run with:
    DECISION_RELAY_ENDPOINT=https://decisions.example.com/api/v1/run \
        uvicorn examples.middleware_app:app
"""

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.responses import HTMLResponse

from decision_relay import DecisionRelay, RelayConfig
from decision_relay.http import RelayMiddleware

load_dotenv()

app = FastAPI()


@app.get("/", response_class=HTMLResponse)
async def landing():
    return "<h1>Welcome</h1>"


app.add_middleware(RelayMiddleware, relay=DecisionRelay(RelayConfig.from_env()))
