"""FastAPI API endpoints under /api.

Endpoint groups: settings and health, game state (state, narrative,
actions, week, items, minigames) and special events. All game endpoints
act on the session held in app.state.session.
"""

from fastapi import APIRouter

from .events import router as events_router
from .game import router as game_router
from .settings import router as settings_router

router = APIRouter()
router.include_router(settings_router)
router.include_router(game_router)
router.include_router(events_router)
