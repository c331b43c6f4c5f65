from fastapi import FastAPI
from dotenv import load_dotenv
import logging

from puzzle_room.api.routes import router
from puzzle_room.session_store import SessionStore
from puzzle_room.settings import settings_from_env

# Local runs may keep OPENAI_* / PUZZLE_ROOM_* in a .env file; real env wins.
load_dotenv(override=False)

app = FastAPI(title="puzzle-room", version="0.1.0")
app.include_router(router)
app.state.sessions = SessionStore()

# Configure logging
logging.basicConfig(level=settings_from_env().log_level)
logger = logging.getLogger(__name__)


@app.get("/info")
async def info() -> dict[str, str]:
    return {"name": "puzzle-room", "version": "0.1.0"}
