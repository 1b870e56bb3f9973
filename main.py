"""
main.py
-------
FastAPI microservice exposing the ICD-10 term matching engine.
The presentation shell (web page, CLI, another service) calls these
endpoints and renders the structured results however it likes.

Endpoints:
  GET  /              → service banner
  GET  /health        → service health check
  POST /analyze       → annotate clinical text word by word
  GET  /search        → filter the code table by code or keyword
  GET  /codes/icd10   → map a single term to an ICD-10 code
  GET  /vocabulary    → controlled vocabulary derived from the table
"""

# Load .env file first so ICD10_TABLE_PATH / LOG_LEVEL are visible
from dotenv import load_dotenv
load_dotenv()

from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from engine.term_engine import TermMatchingEngine
from engine.analyzer import describe
from utils import logger, generate_id, current_timestamp

VERSION = "1.0.0"

# ── App setup ─────────────────────────────────────────────────────────────────
app = FastAPI(
    title="ICD-10 Clinical Text Analyzer",
    description="Maps free-text clinical terms to ICD-10 codes",
    version=VERSION,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ── Engine instance (created once at startup) ─────────────────────────────────
term_engine = TermMatchingEngine()


class AnalyzeRequest(BaseModel):
    """Clinical text to annotate."""
    text: str = Field(default="", description="Free clinical text")


@app.on_event("startup")
async def startup():
    logger.info("ICD-10 Clinical Text Analyzer started — http://localhost:8000")


# ── Banner ────────────────────────────────────────────────────────────────────
@app.get("/")
async def root():
    return JSONResponse({"message": "ICD-10 Clinical Text Analyzer API running", "version": VERSION})


# ── Health ────────────────────────────────────────────────────────────────────
@app.get("/health")
async def health():
    return {
        "status": "running",
        "version": VERSION,
        "service": "ICD-10 Clinical Text Analyzer",
        **term_engine.stats(),
    }


# ── Text analysis ─────────────────────────────────────────────────────────────
@app.post("/analyze")
async def analyze_text(request: AnalyzeRequest):
    """
    Tokenize the text and map each word of four or more characters
    to an ICD-10 code, or suggest a close vocabulary word.
    """
    try:
        analysis = term_engine.analyze_text(request.text)
        for result in analysis["results"]:
            result["message"] = describe(result)

        logger.info(
            f"Analyzed {len(request.text)} chars: tokens={analysis['token_count']} "
            f"matched={analysis['matched_count']}"
        )

        return JSONResponse(content={
            "status": "success",
            "analysis_id": generate_id(),
            "analyzed_at": current_timestamp(),
            **analysis,
        })

    except Exception as e:
        logger.error(f"Analysis failed: {e}", exc_info=True)
        raise HTTPException(500, f"Analysis failed: {str(e)}")


# ── Code search ───────────────────────────────────────────────────────────────
@app.get("/search")
async def search_codes(q: str = ""):
    """Search by code or keyword. Example: /search?q=anemia (empty q lists all)"""
    results = term_engine.search_codes(q)
    return JSONResponse(content={"query": q, "count": len(results), "results": results})


@app.get("/codes/icd10")
async def code_icd10(q: str = ""):
    """Map one term to ICD-10. Example: /codes/icd10?q=diabetes"""
    if not q:
        return {"error": "Provide ?q=search_term"}
    return JSONResponse(content=term_engine.code_term(q))


# ── Vocabulary ────────────────────────────────────────────────────────────────
@app.get("/vocabulary")
async def vocabulary():
    words = list(term_engine.vocabulary)
    return {"count": len(words), "words": words}
