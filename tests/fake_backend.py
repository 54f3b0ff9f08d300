"""In-memory Social Sports backend used by the test suite.

Routes mirror the REST surface the client consumes. ``FakeBackend`` holds the
state and a few knobs (forced responses, WhatsApp on/off) that tests flip to
exercise error paths. Every request is recorded in ``FakeBackend.requests``.
"""
import itertools
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from fastapi import APIRouter, Depends, FastAPI, Header, HTTPException, Request, status
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException


class FakeBackend:
    def __init__(self):
        self.users: dict[str, dict[str, Any]] = {}
        self.passwords: dict[str, str] = {}
        self.tokens: dict[str, str] = {}
        self.events: dict[str, dict[str, Any]] = {}
        self.requests: list[dict[str, Any]] = []
        self.overrides: dict[tuple[str, str], tuple[int, Any]] = {}
        self.whatsapp_enabled = True
        self.qr_code_url = "https://wa.me/qr/TESTCODE"
        self.register_returns_token = True
        self._ids = itertools.count(1)

    # -- helpers used by tests -------------------------------------------------
    def add_user(self, name: str = "Test User", email: str = "test@example.com", password: str = "secret") -> dict:
        user_id = f"user-{next(self._ids)}"
        user = {
            "id": user_id,
            "name": name,
            "email": email,
            "createdAt": datetime.now(timezone.utc).isoformat(),
        }
        self.users[user_id] = user
        self.passwords[email] = password
        return user

    def issue_token(self, user_id: str) -> str:
        token = uuid.uuid4().hex
        self.tokens[token] = user_id
        return token

    def add_event(self, created_by: str = "user-0", **fields) -> dict:
        event_id = str(next(self._ids))
        event = {
            "eventId": event_id,
            "sport": "PADEL",
            "location": "Padel City Amsterdam",
            "date": (datetime.now(timezone.utc) + timedelta(days=1)).isoformat(),
            "maxPlayers": 4,
            "currentPlayers": 1,
            "skillLevel": 3,
            "status": "CONFIRMED",
            "createdBy": created_by,
            "createdAt": datetime.now(timezone.utc).isoformat(),
            "participants": [],
        }
        event.update(fields)
        self.events[event_id] = event
        return event

    def force(self, method: str, path: str, status_code: int, body: Any = None) -> None:
        """Answer ``method path`` with a canned response until cleared."""
        self.overrides[(method.upper(), path)] = (status_code, body)

    def calls(self, method: str, path: str) -> list[dict]:
        return [r for r in self.requests if r["method"] == method.upper() and r["path"] == path]


class CreateEventIn(BaseModel):
    sport: str
    location: str
    date: str
    maxPlayers: int
    skillLevel: int
    creatorName: str
    creatorPhone: Optional[str] = None
    bookingUrl: Optional[str] = None


class JoinIn(BaseModel):
    userName: str
    userPhone: Optional[str] = None


class CancelIn(BaseModel):
    reason: Optional[str] = None


class ParseIn(BaseModel):
    message: str


class RegisterIn(BaseModel):
    name: str
    email: str
    password: str
    phoneNumber: Optional[str] = None


class LoginIn(BaseModel):
    email: str
    password: str


class LinkIn(BaseModel):
    userId: str
    phoneNumber: str


def create_app(backend: FakeBackend) -> FastAPI:
    app = FastAPI(title="Fake Social Sports backend")

    @app.exception_handler(StarletteHTTPException)
    async def _message_body(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"message": exc.detail})

    @app.middleware("http")
    async def _record_and_override(request: Request, call_next):
        backend.requests.append({
            "method": request.method,
            "path": request.url.path,
            "authorization": request.headers.get("authorization"),
        })
        override = backend.overrides.get((request.method, request.url.path))
        if override is not None:
            status_code, body = override
            if body is None:
                return Response(status_code=status_code)
            if isinstance(body, str):
                return Response(content=body, status_code=status_code, media_type="text/html")
            return JSONResponse(status_code=status_code, content=body)
        return await call_next(request)

    def current_user(authorization: Optional[str] = Header(None)) -> dict:
        if not authorization or not authorization.startswith("Bearer "):
            raise HTTPException(status_code=401, detail="Missing Bearer token")
        user_id = backend.tokens.get(authorization[len("Bearer "):])
        if user_id is None or user_id not in backend.users:
            raise HTTPException(status_code=401, detail="Invalid token")
        return backend.users[user_id]

    def find_event(event_id: str) -> dict:
        event = backend.events.get(event_id)
        if event is None:
            raise HTTPException(status_code=404, detail="Event not found")
        return event

    # -- events ------------------------------------------------------------------
    events = APIRouter()

    @events.get("")
    def list_events(user: dict = Depends(current_user)):
        return list(backend.events.values())

    @events.get("/my-events")
    def my_events(user: dict = Depends(current_user)):
        return [
            e for e in backend.events.values()
            if e["createdBy"] == user["id"] or any(p["userId"] == user["id"] for p in e["participants"])
        ]

    @events.get("/sport-types")
    def sport_types():
        return ["PADEL", "TENNIS", "FOOTBALL", "BASKETBALL", "VOLLEYBALL"]

    @events.post("/parse")
    def parse_event(payload: ParseIn):
        if "tennis" not in payload.message.lower():
            raise HTTPException(status_code=422, detail="Could not understand the event description")
        return {
            "sportType": "TENNIS",
            "location": "Central Courts",
            "time": "2024-06-07T15:00:00Z",
            "playerCount": 3,
        }

    @events.get("/{event_id}")
    def get_event(event_id: str, user: dict = Depends(current_user)):
        return find_event(event_id)

    @events.post("", status_code=status.HTTP_201_CREATED)
    def create_event(payload: CreateEventIn, user: dict = Depends(current_user)):
        return backend.add_event(
            created_by=user["id"],
            sport=payload.sport,
            location=payload.location,
            date=payload.date,
            maxPlayers=payload.maxPlayers,
            skillLevel=payload.skillLevel,
            bookingUrl=payload.bookingUrl,
            participants=[{
                "userId": user["id"],
                "name": payload.creatorName,
                "phoneNumber": payload.creatorPhone,
                "joinedAt": datetime.now(timezone.utc).isoformat(),
                "status": "CONFIRMED",
            }],
        )

    @events.post("/{event_id}/join")
    def join_event(event_id: str, payload: JoinIn, user: dict = Depends(current_user)):
        event = find_event(event_id)
        if any(p["userId"] == user["id"] for p in event["participants"]):
            raise HTTPException(status_code=400, detail="You have already joined this event")
        if event["currentPlayers"] >= event["maxPlayers"]:
            raise HTTPException(status_code=400, detail="Event is full")
        event["participants"].append({
            "userId": user["id"],
            "name": payload.userName,
            "phoneNumber": payload.userPhone,
            "joinedAt": datetime.now(timezone.utc).isoformat(),
            "status": "CONFIRMED",
        })
        event["currentPlayers"] += 1
        return event

    @events.delete("/{event_id}/leave/{user_id}")
    def leave_event(event_id: str, user_id: str, user: dict = Depends(current_user)):
        event = find_event(event_id)
        before = len(event["participants"])
        event["participants"] = [p for p in event["participants"] if p["userId"] != user_id]
        event["currentPlayers"] -= before - len(event["participants"])
        return event

    @events.post("/{event_id}/cancel")
    def cancel_event(event_id: str, payload: CancelIn, user: dict = Depends(current_user)):
        event = find_event(event_id)
        if event["createdBy"] != user["id"]:
            raise HTTPException(status_code=403, detail="Only the creator may cancel this event")
        event["status"] = "Cancelled"
        event["cancelReason"] = payload.reason
        return event

    # -- users -------------------------------------------------------------------
    users = APIRouter()

    @users.post("/register", status_code=status.HTTP_201_CREATED)
    def register(payload: RegisterIn):
        if payload.email in backend.passwords:
            raise HTTPException(status_code=409, detail="Email already registered")
        user = backend.add_user(payload.name, payload.email, payload.password)
        if backend.register_returns_token:
            return {"token": backend.issue_token(user["id"]), "user": user}
        return {"userId": user["id"]}

    @users.post("/login")
    def login(payload: LoginIn):
        if backend.passwords.get(payload.email) != payload.password:
            raise HTTPException(status_code=401, detail="Invalid credentials")
        user = next(u for u in backend.users.values() if u["email"] == payload.email)
        return {"token": backend.issue_token(user["id"]), "user": user}

    @users.get("/me")
    def me(user: dict = Depends(current_user)):
        return user

    @users.get("/{user_id}")
    def get_profile(user_id: str, user: dict = Depends(current_user)):
        target = backend.users.get(user_id)
        if target is None:
            raise HTTPException(status_code=404, detail="User not found")
        return {"userId": target["id"], "name": target["name"], "email": target["email"],
                "whatsappLinked": False, "createdAt": target["createdAt"], "isPremium": False}

    @users.put("/{user_id}")
    def update_profile(user_id: str, payload: dict, user: dict = Depends(current_user)):
        if user_id != user["id"]:
            raise HTTPException(status_code=403, detail="Cannot edit another user's profile")
        if "name" in payload:
            user["name"] = payload["name"]
        return {"userId": user["id"], "name": user["name"], "email": user["email"],
                "phoneNumber": payload.get("phoneNumber"), "whatsappLinked": False,
                "favoriteSports": payload.get("favoriteSports", []),
                "createdAt": user["createdAt"], "isPremium": False}

    # -- whatsapp ----------------------------------------------------------------
    whatsapp = APIRouter()

    def require_whatsapp() -> None:
        if not backend.whatsapp_enabled:
            raise HTTPException(status_code=404, detail="Not Found")

    @whatsapp.get("/qrcode", dependencies=[Depends(require_whatsapp)])
    def qrcode(user: dict = Depends(current_user)):
        return {"qrCodeUrl": backend.qr_code_url}

    @whatsapp.api_route("/status", methods=["GET", "HEAD"], dependencies=[Depends(require_whatsapp)])
    def whatsapp_status():
        return {"connected": False}

    @whatsapp.post("/link", dependencies=[Depends(require_whatsapp)])
    def link(payload: LinkIn, user: dict = Depends(current_user)):
        return {"success": payload.userId == user["id"]}

    # -- misc --------------------------------------------------------------------
    misc = APIRouter()

    @misc.get("/stats")
    def stats():
        return {"activePlayers": 120, "gamesWeekly": 35, "padelVenues": 12, "playerRating": 4.8}

    @misc.get("/test-data/summary")
    def test_data_summary():
        return {"users": len(backend.users), "events": len(backend.events)}

    app.include_router(events, prefix="/api/events")
    app.include_router(users, prefix="/api/users")
    app.include_router(whatsapp, prefix="/api/whatsapp")
    app.include_router(misc, prefix="/api")
    return app
