"""
Card Search - FastAPI application for credit card discovery

Endpoints (under /api/creditcards):
- Listing with bank / annual fee / interest rate filters and text search
- Page ranking (substring-occurrence TF-IDF view)
- Autocomplete (prefix index)
- Spelling suggestions and word frequencies (edit distance over the vocabulary)
- Search history (popular searches)
- Relevance ranking of a client-supplied card list

The corpus is read once at startup and indexed in memory; the index is
read-only afterwards. A missing or empty corpus aborts startup.
"""

import logging
import os
from contextlib import asynccontextmanager
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional

# Load environment variables from .env.local (local dev) or .env (production)
from dotenv import load_dotenv

env_local = Path(__file__).parent.parent / ".env.local"
env_file = Path(__file__).parent.parent / ".env"

if env_local.exists():
    print(f"Loading environment from: {env_local}")
    load_dotenv(env_local, override=True)
elif env_file.exists():
    print(f"Loading environment from: {env_file}")
    load_dotenv(env_file, override=True)

# Configure logging: console (brief) + file (detailed)
from cardsearch.logging_config import DEFAULT_KEEP_SESSIONS, DEFAULT_LOG_FILE, setup_logging

log_level = os.getenv("LOG_LEVEL", "INFO").upper()
console_level = getattr(logging, log_level, logging.INFO)
setup_logging(
    log_file=os.getenv("LOG_FILE", DEFAULT_LOG_FILE),
    console_level=console_level,
    file_level=logging.DEBUG,
    keep_sessions=int(os.getenv("LOG_KEEP_SESSIONS", DEFAULT_KEEP_SESSIONS)),
)

logger = logging.getLogger(__name__)


from fastapi import FastAPI, HTTPException, Query, Response, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from . import __version__
from .corpus_loader import load_records
from .index import build_index
from .models import RECORD_FIELDS, Record
from .search_history import SearchHistory
from .service import CardSearchService

# Configuration from environment variables
CORPUS_PATH = os.getenv("CORPUS_PATH", "data/Credit_Card_Details.xlsx")
PORT = int(os.getenv("PORT", "8080"))
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "http://127.0.0.1:5500").split(",") if o.strip()]
SPELLING_MAX_DISTANCE = int(os.getenv("SPELLING_MAX_DISTANCE", "2"))
SPELLING_MAX_SUGGESTIONS = int(os.getenv("SPELLING_MAX_SUGGESTIONS", "3"))

API_PREFIX = "/api/creditcards"

APP_VERSION = __version__
APP_START_TIME = datetime.utcnow().isoformat() + "Z"

# Global instances
search_history = SearchHistory()
search_service: Optional[CardSearchService] = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load the corpus and build the search index before serving"""
    global search_service
    
    logger.info(f"Loading card corpus from {CORPUS_PATH}...")
    records = load_records(CORPUS_PATH)
    index = build_index(records)
    search_service = CardSearchService(index, search_history)
    logger.info("Card search service ready")
    
    yield
    
    logger.info("Shutting down...")
    search_service = None


app = FastAPI(
    title="Card Search API",
    description="Credit card search with autocomplete, spelling suggestions and TF-IDF ranking",
    version=APP_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Request/Response models
class CreditCard(BaseModel):
    """Card as exchanged with clients (camelCase wire names)"""
    model_config = ConfigDict(populate_by_name=True)
    
    title: str = Field(default="", alias="cardTitle")
    image_ref: str = Field(default="", alias="cardImages")
    annual_fee: str = Field(default="", alias="annualFees")
    purchase_rate: str = Field(default="", alias="purchaseInterestRate")
    cash_rate: str = Field(default="", alias="cashInterestRate")
    value_prop: str = Field(default="", alias="productValueProp")
    benefits: str = Field(default="", alias="productBenefits")
    bank_name: str = Field(default="", alias="bankName")
    link: str = Field(default="", alias="cardLink")

    @classmethod
    def from_record(cls, record: Record) -> "CreditCard":
        return cls(**{name: getattr(record, name) for name in RECORD_FIELDS})

    def to_record(self) -> Record:
        return Record(**self.model_dump())


class HealthResponse(BaseModel):
    status: str
    version: str
    started_at: str
    uptime_seconds: float
    cards_indexed: int


class WordFrequencyResponse(BaseModel):
    word: str
    count: int


class RankedCard(BaseModel):
    title: str
    bank: str
    url: str
    relevance: float
    occurrences: int


class PageRankingResponse(BaseModel):
    searchTerm: str
    results: List[RankedCard]


class SearchHistoryRequest(BaseModel):
    term: Optional[str] = None


def _require_service() -> CardSearchService:
    if search_service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Search index not initialized",
        )
    return search_service


def _to_cards(records: List[Record]) -> List[CreditCard]:
    return [CreditCard.from_record(record) for record in records]


# Routes
@app.get("/", response_model=dict)
async def root():
    """Root endpoint"""
    return {
        "service": "Card Search API",
        "version": APP_VERSION,
        "status": "running",
        "docs": "/docs",
    }


@app.get("/health", response_model=HealthResponse)
async def health():
    """Health check endpoint"""
    service = _require_service()
    start_time = datetime.fromisoformat(APP_START_TIME.rstrip('Z'))
    uptime = (datetime.utcnow() - start_time).total_seconds()
    
    return HealthResponse(
        status="healthy",
        version=APP_VERSION,
        started_at=APP_START_TIME,
        uptime_seconds=round(uptime, 2),
        cards_indexed=len(service.index.records),
    )


@app.get(API_PREFIX, response_model=List[CreditCard])
async def list_cards(
    bank_name: Optional[str] = Query(None, alias="bankName"),
    min_fee: Optional[float] = Query(None, alias="minFee"),
    max_fee: Optional[float] = Query(None, alias="maxFee"),
    min_interest: Optional[float] = Query(None, alias="minInterest", description="Percent, e.g. 19.99"),
    max_interest: Optional[float] = Query(None, alias="maxInterest", description="Percent, e.g. 24.99"),
    search: Optional[str] = Query(None, description="Free-text query; records the search and ranks results"),
    rank: Optional[bool] = Query(None, description="Accepted for client compatibility; a search term always ranks"),
):
    """
    List cards, optionally filtered and ranked.
    
    Filters apply in order: bank name (case-insensitive exact match),
    annual fee range, purchase interest rate range (percent). Cards whose
    fee or rate cannot be parsed are left out of range-filtered results.
    A non-blank `search` ranks the remaining cards by TF-IDF cosine
    similarity and drops cards that do not match at all.
    The `rank` flag is accepted but has no effect of its own.
    """
    service = _require_service()
    cards = service.find_cards(
        bank_name=bank_name,
        min_fee=min_fee,
        max_fee=max_fee,
        min_interest=min_interest,
        max_interest=max_interest,
        search=search,
    )
    return _to_cards(cards)


@app.get(f"{API_PREFIX}/page-ranking", response_model=PageRankingResponse)
async def page_ranking(term: str = Query(..., description="Search term")):
    """
    Ranked search results by substring-occurrence TF-IDF.
    
    Candidates are the cards matching `term` in the cosine model; each gets
    a relevance score and a count of literal term occurrences.
    """
    service = _require_service()
    return service.ranked_search_results(term)


@app.get(f"{API_PREFIX}/autocomplete", response_model=List[str])
async def autocomplete(prefix: str = Query(..., description="Word prefix")):
    """Indexed words starting with prefix (case-insensitive), sorted"""
    service = _require_service()
    return service.autocomplete(prefix)


@app.get(f"{API_PREFIX}/spelling-suggestions", response_model=List[str])
async def spelling_suggestions(
    word: str = Query(..., description="Possibly misspelled word"),
    max_distance: int = Query(SPELLING_MAX_DISTANCE, alias="maxDistance", ge=0),
    max_suggestions: int = Query(SPELLING_MAX_SUGGESTIONS, alias="maxSuggestions", ge=1),
):
    """Vocabulary words within maxDistance edits of word, closest first"""
    service = _require_service()
    return service.spelling_suggestions(word, max_distance, max_suggestions)


@app.get(f"{API_PREFIX}/word-frequency", response_model=WordFrequencyResponse)
async def word_frequency(word: str = Query(...)):
    """Occurrences of word across card titles, descriptions, benefits and bank names"""
    service = _require_service()
    return WordFrequencyResponse(word=word, count=service.word_frequency(word))


@app.get(f"{API_PREFIX}/search-history", response_model=Dict[str, int])
async def get_search_history(limit: int = Query(10, ge=0)):
    """Most popular search terms with their counts"""
    return search_history.popular_searches(limit)


@app.delete(f"{API_PREFIX}/search-history", status_code=status.HTTP_204_NO_CONTENT)
async def clear_search_history():
    search_history.clear()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@app.post(f"{API_PREFIX}/search-history")
async def record_search(request: SearchHistoryRequest):
    """Record a search term (blank terms are ignored)"""
    search_history.record_search(request.term)
    return Response(status_code=status.HTTP_200_OK)


@app.post(f"{API_PREFIX}/rank", response_model=List[CreditCard])
async def rank_cards(
    cards: List[CreditCard],
    query: Optional[str] = Query(None, description="Optional query; without it the list is returned as given"),
):
    """
    Rank a client-supplied card list by relevance to query.
    
    Cards that are not part of the indexed corpus cannot be scored and are
    dropped when a query is given.
    """
    service = _require_service()
    ranked = service.rank([card.to_record() for card in cards], query or "")
    return _to_cards(ranked)


@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    """Global exception handler"""
    logger.exception(f"Unhandled error on {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal server error",
            "detail": str(exc),
        },
    )


if __name__ == "__main__":
    import uvicorn
    
    uvicorn.run(
        "cardsearch.main:app",
        host="0.0.0.0",
        port=PORT,
        reload=True,  # Development only
    )
