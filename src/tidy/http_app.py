"""FastAPI app.

Reader clients post a page's markup and get back the main content.
"""

from __future__ import annotations

import asyncio
from typing import Optional

from bs4 import BeautifulSoup
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from .domain.errors import RenderError, RenderTimeoutError
from .domain.models import ErrorCode
from .lifespan import app_state
from .observability.logger import get_logger
from .processing.style_resolver import InlineStyleResolver

logger = get_logger(__name__)

app = FastAPI(title="Tidy Reader Service", version="0.1.0")


class TidyRequest(BaseModel):
    html: str
    renderStyles: bool = False


class TidyResponse(BaseModel):
    success: bool
    content: Optional[str] = None
    errorCode: str = ""


@app.get("/healthz")
async def healthz():
    return {"status": "ok"}


@app.post("/api/v1/tidy")
async def tidy(payload: TidyRequest) -> TidyResponse:
    if not payload.html.strip():
        raise HTTPException(status_code=400, detail="html_required")
    pipeline = app_state.get("pipeline")
    if pipeline is None:
        raise HTTPException(status_code=503, detail="pipeline_unavailable")

    soup = BeautifulSoup(payload.html, "lxml")

    if payload.renderStyles:
        probe = app_state.get("style_probe")
        if probe is None:
            raise HTTPException(status_code=503, detail="style_probe_unavailable")
        try:
            resolver = await probe.snapshot(soup)
        except RenderTimeoutError as exc:
            logger.warning("render_timeout", error=str(exc))
            raise HTTPException(status_code=504, detail=ErrorCode.RENDER_TIMEOUT.value) from exc
        except RenderError as exc:
            logger.warning("render_failed", error=str(exc), detail=exc.info.detail)
            raise HTTPException(status_code=502, detail=ErrorCode.RENDER_ERROR.value) from exc
    else:
        resolver = InlineStyleResolver()

    # The tree is owned by this request only; extraction runs off the event loop
    result = await asyncio.to_thread(pipeline.extract, soup, resolver)
    logger.info("tidy_request_completed", success=result is not None, render_styles=payload.renderStyles)
    if result is None:
        return TidyResponse(success=False, errorCode=ErrorCode.NO_MAIN_CONTENT.value)
    return TidyResponse(success=True, content=result.content)
