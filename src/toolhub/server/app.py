"""HTTP bridge over a HubContext.

Routes:
    GET  /health          liveness plus tool count and catalog load time
    GET  /tools           catalog listing, filtered by ?category= and ?q=
    GET  /tools/{name}    one tool definition, 404 when unknown
    GET  /categories      tool counts per category
    POST /execute         {tool, params} dispatched through the orchestrator
    POST /skills/inject   budgeted skills system prompt for a product/query
"""

from __future__ import annotations

from typing import Any

import uvicorn
from fastapi import APIRouter, Body, FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from toolhub import __version__
from toolhub.core.console import get_logger
from toolhub.core.runtime import HubContext
from toolhub.skills.injection import inject_skills

logger = get_logger(__name__)

router = APIRouter()


class InjectRequest(BaseModel):
    product: str | None = None
    query: str | None = None
    skills: list[str] | None = None
    max_tokens: int | None = Field(default=None, ge=0)


def _hub(request: Request) -> HubContext:
    return request.app.state.hub


def _summary(hub: HubContext, name: str) -> dict[str, Any] | None:
    handle = hub.registry.get(name)
    if handle is None:
        return None
    summary = handle.definition.summary()
    summary["category"] = hub.registry.category_of(name) or summary["category"]
    return summary


@router.get("/health")
async def health(request: Request) -> dict[str, Any]:
    hub = _hub(request)
    return {
        "status": "ok",
        "tools": len(hub.registry),
        "tier": hub.catalog.tier,
        "loadedAt": hub.catalog.loaded_at.isoformat(),
        "port": hub.config.server.port,
    }


@router.get("/tools")
async def list_tools(
    request: Request, category: str | None = None, q: str | None = None
) -> dict[str, Any]:
    hub = _hub(request)
    handles = hub.registry.search(q) if q else hub.registry.get_all()
    tools = [_summary(hub, h.definition.name) for h in handles]
    if category:
        tools = [t for t in tools if t and t["category"] == category]
    return {"count": len(tools), "tools": tools}


@router.get("/tools/{name}")
async def get_tool(request: Request, name: str) -> Any:
    summary = _summary(_hub(request), name)
    if summary is None:
        return JSONResponse(status_code=404, content={"error": "tool not found"})
    return summary


@router.get("/categories")
async def categories(request: Request) -> dict[str, Any]:
    counts = _hub(request).registry.category_counts()
    return {"count": len(counts), "categories": counts}


@router.post("/execute")
async def execute(request: Request, payload: dict[str, Any] | None = Body(default=None)) -> Any:
    hub = _hub(request)
    payload = payload or {}
    tool = payload.get("tool")
    if not tool or not isinstance(tool, str):
        return JSONResponse(status_code=400, content={"error": "tool field required"})
    if not hub.registry.has(tool):
        return JSONResponse(
            status_code=404, content={"success": False, "error": f"Tool '{tool}' not found"}
        )

    params = payload.get("params") or {}
    if not isinstance(params, dict):
        return JSONResponse(status_code=400, content={"error": "params must be an object"})

    result = await hub.orchestrator.execute_one(tool, params)
    return result.model_dump(mode="json")


@router.post("/skills/inject")
def skills_inject(request: Request, body: InjectRequest) -> dict[str, Any]:
    hub = _hub(request)
    skills_config = hub.config.skills
    injection = inject_skills(
        hub.skill_selector,
        hub.skill_loader,
        body.product or skills_config.default_product,
        query=body.query,
        explicit_names=body.skills,
        max_tokens=skills_config.max_tokens if body.max_tokens is None else body.max_tokens,
    )
    return injection.model_dump()


def create_app(hub: HubContext) -> FastAPI:
    app = FastAPI(title="toolhub", version=__version__)
    app.state.hub = hub
    app.include_router(router)
    return app


def run(hub: HubContext, host: str | None = None, port: int | None = None) -> None:
    bind_host = host or hub.config.server.host
    bind_port = port or hub.config.server.port
    logger.info("Serving %d tools on http://%s:%d", len(hub.registry), bind_host, bind_port)
    uvicorn.run(
        create_app(hub),
        host=bind_host,
        port=bind_port,
        log_level=hub.config.log_level.lower(),
        access_log=False,
    )


__all__ = ["create_app", "router", "run"]
