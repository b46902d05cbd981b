"""Feature flags service - flag administration and per-user evaluation."""

from typing import Annotated, List, Optional

import structlog
import uvicorn
from fastapi import APIRouter, Depends, FastAPI, Path, Request, Response, status

from libs.contracts.flag_spec import (
    EvaluationRequest,
    EvaluationResponse,
    MAX_KEY_LENGTH,
    Flag,
    FlagCreate,
    FlagUpdate,
)
from libs.utils.exceptions import ConfigurationError, ConflictError, NotFoundError
from libs.utils.fastapi_app_factory import create_fastapi_app
from libs.utils.logging_config import configure_structured_logging

from apps.feature_flags_service.core.engine import evaluate
from apps.feature_flags_service.core.errors import InvalidConfiguration
from apps.feature_flags_service.core.flag_store import FlagConflictError, FlagStore
from apps.feature_flags_service.settings import Settings, settings as default_settings

logger = structlog.get_logger(__name__)

router = APIRouter()

FlagKey = Annotated[str, Path(min_length=1, max_length=MAX_KEY_LENGTH, description="Unique flag key")]


def get_flag_store(request: Request) -> FlagStore:
    """Dependency returning the store owned by the running app."""
    return request.app.state.flag_store


def _not_found(key: str) -> NotFoundError:
    return NotFoundError(f"flag not found: {key}", details={"key": key})


@router.get("/flags", response_model=List[Flag])
async def list_flags(store: FlagStore = Depends(get_flag_store)):
    return await store.list_flags()


@router.post("/flags", response_model=Flag, status_code=status.HTTP_201_CREATED)
async def create_flag(body: FlagCreate, store: FlagStore = Depends(get_flag_store)):
    try:
        return await store.create(body)
    except FlagConflictError as e:
        raise ConflictError(str(e), details={"key": e.key}) from e


@router.get("/flags/{key}", response_model=Flag)
async def get_flag(key: FlagKey, store: FlagStore = Depends(get_flag_store)):
    flag = await store.get(key)
    if flag is None:
        raise _not_found(key)
    return flag


@router.patch("/flags/{key}", response_model=Flag)
async def update_flag(key: FlagKey, body: FlagUpdate, store: FlagStore = Depends(get_flag_store)):
    flag = await store.update(key, body)
    if flag is None:
        raise _not_found(key)
    return flag


@router.delete("/flags/{key}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_flag(key: FlagKey, store: FlagStore = Depends(get_flag_store)):
    if not await store.delete(key):
        raise _not_found(key)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/evaluate", response_model=EvaluationResponse)
async def evaluate_flag(body: EvaluationRequest, store: FlagStore = Depends(get_flag_store)):
    definition = await store.get_definition(body.key)
    if definition is None:
        raise _not_found(body.key)

    try:
        result = evaluate(definition, body.user_id)
    except InvalidConfiguration as e:
        logger.error("Flag configuration is invalid", flag_key=body.key, error=str(e))
        raise ConfigurationError(str(e), details={"key": body.key}) from e

    logger.debug(
        "Flag evaluated",
        flag_key=result.key,
        user_id=body.user_id,
        matched=result.matched,
        variant=result.variant,
    )
    return EvaluationResponse(key=result.key, matched=result.matched, variant=result.variant)


def create_app(app_settings: Optional[Settings] = None, store: Optional[FlagStore] = None) -> FastAPI:
    """Build the service; ``store`` defaults to one on ``app_settings.database_url``."""
    app_settings = app_settings or default_settings
    configure_structured_logging(app_settings.log_level, app_settings.log_json)

    flag_store = store or FlagStore(app_settings.database_url, cache_ttl_s=app_settings.cache_ttl_s)

    app = create_fastapi_app(
        title=app_settings.app_name,
        description="Feature flag toggling with percentage rollouts and weighted variants",
        version="0.1.0",
        service_name=app_settings.app_name,
        startup_hook=flag_store.initialize,
        shutdown_hook=flag_store.close,
        cors_origins=app_settings.cors_origin_list,
        health_checks={"database": flag_store.health_check},
    )
    app.state.flag_store = flag_store
    app.include_router(router)
    return app


app = create_app()


def run() -> None:
    """Console entry point."""
    logger.info("Starting server", host=default_settings.host, port=default_settings.port)
    uvicorn.run(app, host=default_settings.host, port=default_settings.port, log_config=None)


if __name__ == "__main__":
    run()
