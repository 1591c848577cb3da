from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from src.api.error import ClientError, client_error_handler
from src.api.routes import customers
from src.depends import close_balance_cache
from src.logging_config import configure_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await close_balance_cache()


def create_app(config) -> FastAPI:
    configure_logging(config.LOG_LEVEL, getattr(config, "LOG_FORMAT", "console"))

    app = FastAPI(
        title="Customer Balance Service",
        description="Customer running balances, ledger statements and credit status",
        lifespan=lifespan,
    )

    if config.CORS_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.CORS_ORIGINS,
            allow_credentials=config.CORS_ALLOW_CREDENTIALS,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.add_exception_handler(ClientError, client_error_handler)
    app.include_router(customers.router, prefix=config.API_PREFIX)

    return app
