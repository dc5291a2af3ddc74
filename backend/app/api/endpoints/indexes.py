"""
Index endpoints - generation, retrieval, updates and derived views
"""
import random
from typing import List, Dict, Any

from fastapi import APIRouter, Depends, HTTPException, Query
from loguru import logger
from sqlalchemy.orm import Session

from app.database import get_db
from app.schemas.index import GenerateIndexRequest, IndexUpdate, NapkinRequest
from app.services.data_fetcher.price_source import DEFAULT_BENCHMARKS
from app.services.data_fetcher.quotes import StockQuote
from app.services.events import EventPublisher, get_event_publisher, make_event, INDEX_UPDATED
from app.services.indexing.backtesting import generate_backtest
from app.services.indexing.orchestrator import IndexOrchestrator
from app.services.indexing.performance import performance_score, categorize
from app.services.storage import IndexRepository

router = APIRouter()

TRENDING_LIMIT = 10
EXPLORE_LIMIT = 20

# Fields backed by NOT NULL columns; an explicit null is rejected
REQUIRED_UPDATE_FIELDS = ("name", "isPublic")


def get_repository(db: Session = Depends(get_db)) -> IndexRepository:
    return IndexRepository(db)


def get_orchestrator(
    repository: IndexRepository = Depends(get_repository),
    publisher: EventPublisher = Depends(get_event_publisher),
) -> IndexOrchestrator:
    return IndexOrchestrator(repository=repository, publisher=publisher)


def _index_with_stocks(repository: IndexRepository, index) -> Dict[str, Any]:
    return {
        **index.to_dict(),
        "stocks": [stock.to_dict() for stock in repository.get_stocks(index.id)],
    }


def _require_index(repository: IndexRepository, index_id: int):
    index = repository.get_index(index_id)
    if not index:
        raise HTTPException(status_code=404, detail="Index not found")
    return index


@router.post("/generate-index")
async def generate_index(
    request: GenerateIndexRequest,
    orchestrator: IndexOrchestrator = Depends(get_orchestrator),
):
    """Build, price and store an index from a plain-language theme."""
    prompt = (request.prompt or "").strip()
    if not prompt:
        raise HTTPException(status_code=400, detail="Prompt is required")

    try:
        return await orchestrator.generate(prompt)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Index generation failed for '{prompt}': {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/index/{index_id}")
async def get_index(index_id: int, repository: IndexRepository = Depends(get_repository)):
    index = _require_index(repository, index_id)
    return _index_with_stocks(repository, index)


@router.get("/indexes")
async def list_indexes(repository: IndexRepository = Depends(get_repository)):
    """All indexes, newest first, each with its stocks."""
    return [_index_with_stocks(repository, index) for index in repository.list_indexes()]


@router.get("/trending-indexes")
async def trending_indexes(repository: IndexRepository = Depends(get_repository)):
    """Top indexes by weighted 7d/30d performance, with simulated engagement."""
    trending: List[Dict[str, Any]] = []
    for index in repository.list_indexes():
        data = index.to_dict()
        data.update({
            "followers": random.randint(100, 1099),
            "views": random.randint(1000, 5999),
            "performanceScore": performance_score(data),
        })
        trending.append(data)

    trending.sort(key=lambda item: item["performanceScore"], reverse=True)
    return trending[:TRENDING_LIMIT]


@router.get("/explore")
async def explore(repository: IndexRepository = Depends(get_repository)):
    """Community view: up to 20 indexes with simulated social metrics."""
    items = []
    for index in repository.list_indexes()[:EXPLORE_LIMIT]:
        data = index.to_dict()
        data.update({
            "isPublic": True,
            "creator": f"@investor{random.randint(0, 999)}",
            "followers": random.randint(50, 549),
            "copiedBy": random.randint(10, 109),
            "riskScore": random.randint(1, 10),
            "category": categorize(index.name),
        })
        items.append(data)

    items.sort(key=lambda item: item["performance7d"] or 0.0, reverse=True)
    return items


@router.patch("/index/{index_id}")
async def update_index(
    index_id: int,
    update: IndexUpdate,
    repository: IndexRepository = Depends(get_repository),
    publisher: EventPublisher = Depends(get_event_publisher),
):
    """Partial update of name, description or visibility."""
    changes = update.model_dump(exclude_unset=True)
    nulled = [field for field in REQUIRED_UPDATE_FIELDS if field in changes and changes[field] is None]
    if nulled:
        raise HTTPException(status_code=400, detail=f"{', '.join(nulled)} cannot be null")

    index = repository.update_index(index_id, changes)
    if not index:
        raise HTTPException(status_code=404, detail="Index not found")

    data = index.to_dict()
    logger.info(f"Index {index_id} updated: {', '.join(changes) or 'no fields'}")
    publisher.publish(make_event(INDEX_UPDATED, data))
    return data


@router.get("/index/{index_id}/historical")
async def get_historical(
    index_id: int,
    days: int = Query(30, ge=1, le=3650, description="Window size in days"),
    repository: IndexRepository = Depends(get_repository),
):
    _require_index(repository, index_id)
    return [point.to_dict() for point in repository.get_historical(index_id, days)]


@router.get("/index/{index_id}/backtest")
async def get_backtest(index_id: int, repository: IndexRepository = Depends(get_repository)):
    """Synthetic one-year backtest of the stored holdings."""
    index = _require_index(repository, index_id)

    try:
        quotes = [
            StockQuote(
                symbol=stock.symbol,
                name=stock.name,
                price=stock.price,
                sector=stock.sector,
                market_cap=stock.market_cap,
                change_1d=stock.change_1d,
                change_percent_1d=stock.change_percent_1d,
                source="stored",
            )
            for stock in repository.get_stocks(index_id)
        ]
        benchmarks = {
            "sp500": index.benchmark_sp500 or DEFAULT_BENCHMARKS["sp500"],
            "nasdaq": index.benchmark_nasdaq or DEFAULT_BENCHMARKS["nasdaq"],
        }
        report = generate_backtest(quotes, index.name, benchmarks)
        one_year = report.horizon("1Y")

        return {
            "index": {
                "id": index.id,
                "name": index.name,
                "description": index.description,
                "totalValue": index.total_value,
            },
            "performance": report.performance_dict(),
            "historical": report.historical[-365:],
            "summary": {
                "totalReturn": one_year.portfolio_return,
                "alpha": one_year.alpha,
                "beta": one_year.beta,
                "sharpeRatio": one_year.sharpe_ratio,
                "maxDrawdown": one_year.max_drawdown,
                "volatility": one_year.volatility,
            },
            "benchmarks": {
                "sp500": one_year.sp500_return,
                "nasdaq": one_year.nasdaq_return,
            },
        }
    except Exception as e:
        logger.error(f"Backtest failed for index {index_id}: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/napkin")
async def napkin_export(request: NapkinRequest, repository: IndexRepository = Depends(get_repository)):
    """Chart-ready export of an index for external visualisation tools."""
    if not request.indexId:
        raise HTTPException(status_code=400, detail="Index ID is required")

    index = _require_index(repository, request.indexId)
    return {
        "title": index.name,
        "description": index.description,
        "data": [
            {
                "label": stock.symbol,
                "value": stock.price,
                "change": stock.change_percent_1d,
                "sector": stock.sector,
            }
            for stock in repository.get_stocks(index.id)
        ],
        "performance": {
            "1d": index.performance_1d,
            "7d": index.performance_7d,
            "30d": index.performance_30d,
            "1y": index.performance_1y,
        },
        "benchmarks": {
            "sp500": index.benchmark_sp500,
            "nasdaq": index.benchmark_nasdaq,
        },
    }


@router.get("/portfolio")
async def get_portfolio(repository: IndexRepository = Depends(get_repository)):
    return repository.portfolio_summary()
