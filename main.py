import logging

from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware

from shared.config import LOG_LEVEL
from services.school_directory.context import build_directory
from services.school_directory.controllers.admin_service import router as admin_router
from services.school_directory.controllers.auth_service import router as auth_router
from services.school_directory.controllers.saved_service import router as saved_router
from services.school_directory.controllers.school_service import router as school_router

logging.basicConfig(
    level=LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)

app = FastAPI(title="Japanese School Directory")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def on_startup():
    directory = build_directory()
    await directory.start()
    app.state.directory = directory


@app.on_event("shutdown")
async def on_shutdown():
    directory = getattr(app.state, "directory", None)
    if directory is not None:
        await directory.close()


@app.get("/")
def health_check():
    directory = getattr(app.state, "directory", None)
    mode = directory.data.mode if directory is not None else "starting"
    return {"status": "School directory is running", "storage_mode": mode}


app.include_router(school_router)
app.include_router(auth_router)
app.include_router(saved_router)
app.include_router(admin_router)
