"""FastAPI application entrypoint and HTTP controllers.

This module defines the HTTP endpoints of the exercise tracker.
Controllers are intentionally thin: they accept requests, delegate to
services, and return JSON responses. Every error is rendered as
`{"error": message}`.

Endpoints implemented:
- GET /api/users
- POST /api/users
- POST /api/users/{user_id}/exercises
- GET /api/users/{user_id}/logs
- GET /
- GET /health
"""

import json
import logging
import time
import uuid
from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import FastAPI, Depends, HTTPException, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException
from sqlmodel import Session

from . import services
from .config import settings
from .database import create_db_and_tables, engine, get_session
from .exceptions import ExerciseTrackerError
from .schemas import ErrorOut, ExerciseIn, ExerciseOut, LogOut, UserIn, UserOut

logger = logging.getLogger("exercise_tracker.api")
if not logger.handlers:
    logging.basicConfig(level=settings.LOG_LEVEL)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    create_db_and_tables()
    yield
    engine.dispose()


app = FastAPI(title="Exercise Tracker API", lifespan=lifespan)

if settings.ALLOW_DEV_CORS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.middleware("http")
async def request_context_middleware(request: Request, call_next):
    req_id = request.headers.get("X-Request-ID", uuid.uuid4().hex)
    request.state.request_id = req_id
    started = time.perf_counter()
    response: Response
    try:
        response = await call_next(request)
    except Exception:
        elapsed_ms = round((time.perf_counter() - started) * 1000.0, 2)
        logger.exception(
            "request_failed %s",
            json.dumps(
                {
                    "request_id": req_id,
                    "path": request.url.path,
                    "method": request.method,
                    "duration_ms": elapsed_ms,
                },
                ensure_ascii=True,
            ),
        )
        raise
    response.headers["X-Request-ID"] = req_id
    if request.url.path.startswith("/api"):
        elapsed_ms = round((time.perf_counter() - started) * 1000.0, 2)
        logger.info(
            "request_done %s",
            json.dumps(
                {
                    "request_id": req_id,
                    "path": request.url.path,
                    "method": request.method,
                    "status_code": response.status_code,
                    "duration_ms": elapsed_ms,
                },
                ensure_ascii=True,
            ),
        )
    return response


@app.exception_handler(ExerciseTrackerError)
async def tracker_error_handler(request: Request, exc: ExerciseTrackerError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message, exc_info=exc)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(_request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)}, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(_request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
    return JSONResponse(status_code=400, content={"error": message})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error("%s %s failed", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"error": str(exc) or exc.__class__.__name__})


async def read_fields(request: Request) -> dict:
    """Return the request body as a flat dict.

    JSON objects and url-encoded or multipart forms are both accepted; an
    empty or unreadable body yields an empty dict so the services report
    the missing field by name.
    """
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(("application/x-www-form-urlencoded", "multipart/form-data")):
        form = await request.form()
        return {k: v for k, v in form.items() if isinstance(v, str)}
    body = await request.body()
    if not body:
        return {}
    try:
        data = json.loads(body)
    except ValueError:
        raise HTTPException(status_code=400, detail="Malformed JSON body")
    if not isinstance(data, dict):
        raise HTTPException(status_code=400, detail="Request body must be an object")
    return data


_errors = {400: {"model": ErrorOut}, 500: {"model": ErrorOut}}


@app.get("/api/users", response_model=List[UserOut], responses={500: {"model": ErrorOut}})
def list_users(db: Session = Depends(get_session)):
    """List every user as `{username, _id}`."""
    return services.UserService(db).list_users()


@app.post("/api/users", response_model=UserOut, responses=_errors)
def create_user(fields: dict = Depends(read_fields), db: Session = Depends(get_session)):
    """Create a user; a taken username is rejected with 400."""
    payload = UserIn(username=fields.get("username"))
    return services.UserService(db).create_user(payload.username)


@app.post(
    "/api/users/{user_id}/exercises",
    response_model=ExerciseOut,
    responses={404: {"model": ErrorOut}, **_errors},
)
def add_exercise(user_id: str, fields: dict = Depends(read_fields), db: Session = Depends(get_session)):
    """Record an exercise for `user_id`.

    `duration` must be an integer and `date`, when given, a calendar date;
    an omitted date defaults to today.
    """
    payload = ExerciseIn(
        description=fields.get("description"),
        duration=fields.get("duration"),
        date=fields.get("date"),
    )
    return services.ExerciseService(db).add_exercise(user_id, payload)


@app.get(
    "/api/users/{user_id}/logs",
    response_model=LogOut,
    responses={404: {"model": ErrorOut}, **_errors},
)
def get_logs(
    user_id: str,
    date_from: Optional[str] = Query(None, alias="from"),
    date_to: Optional[str] = Query(None, alias="to"),
    limit: Optional[str] = None,
    db: Session = Depends(get_session),
):
    """Return the user's exercise log.

    `from`/`to` bound the exercise date inclusively and `limit` caps the
    number of entries; a non-numeric limit is ignored.
    """
    return services.ExerciseService(db).get_log(user_id, date_from, date_to, limit)


@app.get("/", response_class=HTMLResponse)
def home():
    """Landing page with small forms for manual testing."""
    return """
    <!DOCTYPE html>
    <html>
    <head>
      <meta charset="UTF-8" />
      <title>Exercise Tracker</title>
      <style>
        body { font-family: Arial, sans-serif; margin: 32px; }
        a { color: #0a6; }
        .card { max-width: 640px; padding: 16px; border: 1px solid #ddd; border-radius: 8px; margin-bottom: 16px; }
        input { display: block; margin: 6px 0; }
      </style>
    </head>
    <body>
      <h1>Exercise Tracker</h1>
      <div class="card">
        <h3>Create a new user</h3>
        <form action="/api/users" method="post">
          <input name="username" type="text" placeholder="username" />
          <input type="submit" value="Submit" />
        </form>
      </div>
      <div class="card">
        <h3>Add exercises</h3>
        <form id="exercise-form" method="post">
          <input id="uid" type="text" placeholder=":_id" />
          <input name="description" type="text" placeholder="description*" />
          <input name="duration" type="text" placeholder="duration* (mins.)" />
          <input name="date" type="text" placeholder="date (yyyy-mm-dd)" />
          <input type="submit" value="Submit" />
        </form>
      </div>
      <p>Logs: <code>GET /api/users/:_id/logs?[from][&amp;to][&amp;limit]</code> &middot; <a href="/docs">Swagger UI</a></p>
      <script>
        document.getElementById("exercise-form").addEventListener("submit", function () {
          this.action = "/api/users/" + document.getElementById("uid").value + "/exercises";
        });
      </script>
    </body>
    </html>
    """


@app.get("/health")
def health():
    """Lightweight health check for uptime monitoring."""
    return {"status": "ok"}
