"""
KJV Guard - HTTP server
=======================
FastAPI app over the resolver, the Christ Test, the journal and the
weekly printables.

  GET  /api/health              liveness
  GET  /api/verse?ref=          exact KJV text (verse string or {verse: text})
  GET  /api/parse?ref=          single-verse or chapter
  GET  /api/books               canonical book names, corpus order
  GET  /api/debug/store         corpus sanity
  GET  /api/debug/has           key presence for book / chapter / verse
  POST /api/check               Christ Test verdict for {text}
  GET  /api/journal             entries, newest first
  POST /api/journal             add {text}
  POST /api/printables/week     weekly printable (HTML)
  POST /api/printables/week.pdf weekly printable (PDF download)

Local dev:
  python -m kjvguard.server
  -> http://localhost:3000/api/health
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

from fastapi import Body, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse, Response

from .config import APP_NAME, TRANSLATION, __version__, server_host, server_port
from .context import get_context, prewarm
from .errors import CorpusLoadError, PolicyError, ResolutionError
from .index import normalize_alias
from .journal import Journal
from .loader import corpus_stats
from .model import SingleVerse
from .pdfgen import DEFAULT_THEME, DEFAULT_TITLE, build_week_pdf, pdf_filename, render_week_html
from .policy import christ_test
from .resolver import get_resolver
from .util import info

# Resolution errors the caller got wrong (400) vs. absent from the corpus (404).
NOT_FOUND_KINDS = {"book_not_found", "verse_not_found"}


@asynccontextmanager
async def lifespan(app: FastAPI):
    ctx = prewarm()
    info(f"{APP_NAME} serving {len(ctx.corpus)} books from {ctx.source}")
    yield


app = FastAPI(title=APP_NAME, version=__version__, lifespan=lifespan)
app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])


# =====================================================================
# ERROR MAPPING
# =====================================================================

@app.exception_handler(ResolutionError)
async def resolution_error_handler(request: Request, exc: ResolutionError):
    status = 404 if exc.kind in NOT_FOUND_KINDS else 400
    return JSONResponse(exc.to_dict(), status_code=status)


@app.exception_handler(PolicyError)
async def policy_error_handler(request: Request, exc: PolicyError):
    return JSONResponse(exc.to_dict(), status_code=400)


@app.exception_handler(CorpusLoadError)
async def corpus_error_handler(request: Request, exc: CorpusLoadError):
    return JSONResponse(exc.to_dict(), status_code=500)


def _as_int(value: str) -> Optional[int]:
    value = value.strip()
    return int(value) if value.isdigit() else None


# =====================================================================
# SCRIPTURE
# =====================================================================

@app.get("/api/health")
async def health():
    return {"ok": True}


@app.get("/api/verse")
async def verse(ref: str = ""):
    ref = ref.strip()
    if not ref:
        raise HTTPException(400, "Missing ref")
    text = get_resolver().quote(ref)
    if isinstance(text, dict):
        text = {str(n): t for n, t in text.items()}
    return {"ref": ref, "version": TRANSLATION, "text": text}


@app.get("/api/parse")
async def parse(ref: str = ""):
    result = get_resolver().resolve(ref)
    kind = "single-verse" if isinstance(result, SingleVerse) else "chapter"
    return {"ref": ref, "type": kind, "canonical": result.reference.label()}


@app.get("/api/books")
async def books():
    return {"books": list(get_resolver().list_books())}


@app.get("/api/debug/store")
async def debug_store():
    ctx = get_context()
    n_books, n_chapters, n_verses = corpus_stats(ctx.corpus)
    return {
        "ok": True,
        "books": n_books,
        "chapters": n_chapters,
        "verses": n_verses,
        "aliases": len(ctx.index),
        "source": ctx.source,
    }


@app.get("/api/debug/has")
async def debug_has(book: str = "", chapter: str = "", verse: str = ""):
    ctx = get_context()
    name = ctx.index.lookup(book) if normalize_alias(book) else None
    chapters = ctx.corpus.get(name or book)
    c_num = _as_int(chapter)
    verses = chapters.get(c_num) if chapters is not None and c_num is not None else None
    v_num = _as_int(verse)
    return {
        "book": name,
        "hasBook": chapters is not None,
        "hasChapter": verses is not None,
        "hasVerse": verses is not None and v_num is not None and v_num in verses,
        "sampleChapters": [str(c) for c in list(chapters)[:5]] if chapters else [],
        "sampleVerses": [str(v) for v in list(verses)[:10]] if verses else [],
    }


# =====================================================================
# CHRIST TEST + JOURNAL
# =====================================================================

@app.post("/api/check")
async def check(body: Optional[Dict[str, Any]] = Body(default=None)):
    return christ_test(str((body or {}).get("text") or "")).to_dict()


# Journal and printables do file I/O or ReportLab builds: plain `def`
# handlers so FastAPI runs them in its threadpool.

@app.get("/api/journal")
def journal_list():
    return [e.to_dict() for e in Journal().entries()]


@app.post("/api/journal")
def journal_add(body: Optional[Dict[str, Any]] = Body(default=None)):
    entry = Journal().add(str((body or {}).get("text") or ""))
    return {"ok": True, "entry": entry.to_dict()}


# =====================================================================
# PRINTABLES
# =====================================================================

def _week_args(body: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    body = body or {}
    refs = body.get("refs") or []
    if not isinstance(refs, list) or not all(isinstance(r, str) for r in refs):
        raise HTTPException(400, "refs must be a list of strings")
    week = body.get("week")
    return {
        "week": "" if week is None else week,
        "theme": str(body.get("theme") or DEFAULT_THEME),
        "title": str(body.get("title") or DEFAULT_TITLE),
        "refs": refs,
    }


@app.post("/api/printables/week", response_class=HTMLResponse)
def printables_week(body: Optional[Dict[str, Any]] = Body(default=None)):
    args = _week_args(body)
    return HTMLResponse(render_week_html(quote=get_resolver().quote, **args))


@app.post("/api/printables/week.pdf")
def printables_week_pdf(body: Optional[Dict[str, Any]] = Body(default=None)):
    args = _week_args(body)
    pdf = build_week_pdf(quote=get_resolver().quote, **args)
    filename = pdf_filename(args["week"])
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


def run(host: Optional[str] = None, port: Optional[int] = None) -> None:
    import uvicorn
    uvicorn.run(app, host=host or server_host(), port=port or server_port())


if __name__ == "__main__":
    run()
