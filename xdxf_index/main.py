import logging
import os
from pathlib import Path
from typing import Annotated, List

from fastapi import Depends, FastAPI, HTTPException, Query

from xdxf_index import admin
from xdxf_index.database import SessionLocal, init_db
from xdxf_index.deps import get_dictionary
from xdxf_index.errors import XdxfError
from xdxf_index.services.dictionary import Dictionary
from xdxf_index.services.search import SearchService
from xdxf_index.services.storage import restore_dictionary


LOGGER = logging.getLogger(__name__)

app = FastAPI(
    title="XDXF index API",
    description="Prefix lookup over XDXF dictionaries",
    version="0.1.0",
)

app.include_router(admin.router)


def _configured_sources() -> List[Path]:
    raw = os.getenv("XDXF_SOURCES", "")
    return [Path(item).expanduser() for item in raw.split(os.pathsep) if item.strip()]


def build_dictionary() -> Dictionary:
    with SessionLocal() as session:
        dictionary = restore_dictionary(session)
    for path in _configured_sources():
        try:
            dictionary.feed_file(path)
        except XdxfError as exc:
            LOGGER.warning("Skipping source %s: %s", path, exc)
    return dictionary


@app.on_event("startup")
def on_startup() -> None:
    init_db()
    app.state.dictionary = build_dictionary()


DictionaryDep = Annotated[Dictionary, Depends(get_dictionary)]


@app.get("/status/info")
def status_info(dictionary: DictionaryDep):
    return {
        "articles": len(dictionary),
        "abbreviations": len(dictionary.abbreviations),
    }


@app.get("/lookup")
def lookup(prefix: Annotated[str, Query(min_length=1)], dictionary: DictionaryDep):
    service = SearchService(dictionary)
    return service.search(prefix)


@app.get("/suggest")
def suggest(term: Annotated[str, Query(min_length=1)], dictionary: DictionaryDep):
    service = SearchService(dictionary)
    return service.suggest(term)


@app.get("/articles/{headword}")
def get_article(headword: str, dictionary: DictionaryDep):
    content = dictionary.get(headword)
    if content is None:
        raise HTTPException(status_code=404, detail="Article not found")
    return {"headword": headword, "content": content}
