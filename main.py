import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import LOG_LEVEL
from logging_config import setup_logging
from routers import command_router, data_router, session_router, upload_router

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Excel AI Analyzer Backend",
    description="Load a spreadsheet, preview it, chart its first rows and run commands against it.",
    version="0.1.0",
)


@app.on_event("startup")
def on_startup():
    setup_logging(LOG_LEVEL)
    logger.info("Excel AI Analyzer API started.")


app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(session_router.router)
app.include_router(upload_router.router)
app.include_router(data_router.router)
app.include_router(command_router.router)


@app.get("/")
async def root():
    return {"message": "Excel AI Analyzer API is running"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="127.0.0.1", port=8000)
