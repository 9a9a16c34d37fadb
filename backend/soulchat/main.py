import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from soulchat import store
from soulchat.config import settings
from soulchat.routers import chat, conversations, messages, search

logging.basicConfig(level=settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await store.connect(seed=settings.seed_demo_data)
    yield
    await store.close()


app = FastAPI(
    title="Soul Chat — chat assistant with web search",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={"detail": "Invalid request data", "errors": jsonable_encoder(exc.errors())},
    )


app.include_router(conversations.router)
app.include_router(messages.router)
app.include_router(chat.router)
app.include_router(search.router)


@app.get("/health")
async def health():
    return {"status": "ok"}
