from tripmind.api.workflow_service import TripService
from tripmind.core.config import ApiSettings
from fastapi import FastAPI
from contextlib import asynccontextmanager
from typing import AsyncGenerator
from functools import lru_cache


@lru_cache(maxsize=1)
def get_trip_service() -> TripService:
    settings = ApiSettings.from_env()
    return TripService(settings)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    try:
        yield
    finally:
        if get_trip_service.cache_info().currsize:
            await get_trip_service().close()
