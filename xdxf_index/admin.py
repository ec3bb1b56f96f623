from __future__ import annotations

import logging
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from xdxf_index.database import get_session
from xdxf_index.deps import get_dictionary
from xdxf_index.errors import XdxfError
from xdxf_index.services.dictionary import Dictionary
from xdxf_index.services.storage import save_feed

LOGGER = logging.getLogger(__name__)


class FeedRequest(BaseModel):
    path: Path = Field(description="XDXF source file to merge into the live dictionary.")
    persist: bool = Field(
        default=False,
        description="Store the rows of this source in the database afterwards.",
    )


class FeedStatus(BaseModel):
    running: bool
    last_source: Optional[str] = None
    last_started: Optional[str] = None
    last_finished: Optional[str] = None
    last_error: Optional[str] = None
    abbreviations: Optional[int] = None
    articles: Optional[int] = None


router = APIRouter(prefix="/admin", tags=["admin"])

_state_lock = threading.Lock()
_state = {
    "running": False,
    "last_source": None,
    "last_started": None,
    "last_finished": None,
    "last_error": None,
    "abbreviations": None,
    "articles": None,
}


def _update_state(**kwargs) -> None:
    with _state_lock:
        _state.update(kwargs)


def _get_state() -> dict:
    with _state_lock:
        return dict(_state)


def _claim_run(source: str) -> bool:
    with _state_lock:
        if _state["running"]:
            return False
        _state.update(
            running=True,
            last_source=source,
            last_started=_now_iso(),
            last_finished=None,
            last_error=None,
        )
        return True


@router.post("/feed", response_model=FeedStatus)
def feed_source(
    payload: FeedRequest,
    dictionary: Dictionary = Depends(get_dictionary),
    session=Depends(get_session),
) -> FeedStatus:
    if not payload.path.exists():
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Source {payload.path} not found.",
        )
    if not _claim_run(str(payload.path)):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Another feed is already running.",
        )

    try:
        summary = dictionary.feed_file(payload.path)
        if payload.persist:
            save_feed(session, summary.parsed, source=str(payload.path))
    except XdxfError as exc:
        LOGGER.warning("Rejected source %s: %s", payload.path, exc)
        _update_state(last_error=str(exc))
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    finally:
        _update_state(running=False, last_finished=_now_iso())

    _update_state(abbreviations=summary.abbreviations, articles=summary.articles)
    return FeedStatus(**_get_state())


@router.get("/feed/status", response_model=FeedStatus)
def feed_status() -> FeedStatus:
    return FeedStatus(**_get_state())


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()
