import os
from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI

from tianshan import storage
from tianshan.display import QueueDisplay
from tianshan.routes import router
from tianshan.session import GameSession

load_dotenv(Path(__file__).parent.parent / ".env")

DEFAULT_DATA_DIR = Path(__file__).parent.parent / "data"


@asynccontextmanager
async def lifespan(app: FastAPI):
    await app.state.session.load()
    yield


def create_app(data_dir: Path | None = None) -> FastAPI:
    resolved = data_dir or Path(os.getenv("DATA_DIR", str(DEFAULT_DATA_DIR)))
    storage.init_storage(resolved)

    app = FastAPI(title="Tianshan SLG", lifespan=lifespan)
    app.state.session = GameSession(
        storage.FileVariableStore(storage.variables_path()),
        QueueDisplay(),
        config=storage.get_config,
    )
    app.include_router(router, prefix="/api")
    return app


# Default app instance for uvicorn (uses DATA_DIR env var or default)
app = create_app()
