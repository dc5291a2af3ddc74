"""
Index orchestrator - the generate-index pipeline.

Flow:
1. Company generator turns the prompt into a named proposal
2. Companies without a ticker are resolved concurrently
3. Quotes for every symbol plus benchmark levels are fetched concurrently
4. Performance summary and synthetic backtest are computed
5. Index, stocks and the latest historical points are persisted
6. A ``new_index`` event is published (fire-and-forget)

Exceptions propagate to the caller; rows already written stay written.
"""
import asyncio
from datetime import datetime
from typing import Dict, Any, List

from loguru import logger

from app.config import get_settings
from app.services.ai.base import CompanyMatch
from app.services.events import EventPublisher, make_event, NEW_INDEX
from app.services.indexing.backtesting import generate_backtest
from app.services.indexing.performance import summarize
from app.services.storage import IndexRepository


class IndexOrchestrator:
    def __init__(
        self,
        repository: IndexRepository,
        publisher: EventPublisher,
        generator=None,
        resolver=None,
        price_source=None,
        settings=None,
    ):
        if generator is None:
            from app.services.ai.company_generator import get_company_generator
            generator = get_company_generator()
        if resolver is None:
            from app.services.data_fetcher.symbol_resolver import get_symbol_resolver
            resolver = get_symbol_resolver()
        if price_source is None:
            from app.services.data_fetcher.price_source import get_price_source
            price_source = get_price_source()

        self.repository = repository
        self.publisher = publisher
        self.generator = generator
        self.resolver = resolver
        self.price_source = price_source
        self.settings = settings or get_settings()

    async def _symbol_for(self, company: CompanyMatch) -> str:
        if company.symbol:
            return company.symbol
        symbol = await self.resolver.resolve(company.name)
        if symbol:
            return symbol
        logger.info(f"No ticker found for '{company.name}', using the name as symbol")
        return company.name

    async def generate(self, prompt: str) -> Dict[str, Any]:
        proposal = await self.generator.generate(prompt)

        symbols: List[str] = list(await asyncio.gather(
            *(self._symbol_for(company) for company in proposal.companies)
        ))

        quotes, benchmarks = await asyncio.gather(
            self.price_source.get_many(symbols),
            self.price_source.get_benchmarks(),
        )

        summary = summarize(quotes)
        report = generate_backtest(quotes, proposal.index_name, benchmarks)
        one_month = report.horizon("1M")
        one_year = report.horizon("1Y")

        index = self.repository.create_index(
            prompt=prompt,
            name=proposal.index_name,
            description=proposal.description,
            total_value=summary.total_value,
            performance_1d=summary.performance_1d,
            performance_7d=summary.performance_7d,
            performance_30d=one_month.portfolio_return if one_month else 0.0,
            performance_1y=one_year.portfolio_return if one_year else 0.0,
            benchmark_sp500=benchmarks["sp500"],
            benchmark_nasdaq=benchmarks["nasdaq"],
        )

        stocks = []
        for company, quote in zip(proposal.companies, quotes):
            stocks.append(self.repository.add_stock(
                index_id=index.id,
                symbol=quote.symbol,
                name=quote.name,
                price=quote.price,
                sector=quote.sector or company.sector,
                market_cap=quote.market_cap,
                weight=1.0,
                change_1d=quote.change_1d,
                change_percent_1d=quote.change_percent_1d,
            ))

        points = report.historical[-self.settings.HISTORICAL_POINTS_PER_INDEX:]
        self.repository.add_historical_points(index.id, [
            {
                "date": datetime.fromisoformat(point["date"]),
                "value": point["portfolioValue"],
                "sp500Value": point["sp500Value"],
                "nasdaqValue": point["nasdaqValue"],
            }
            for point in points
        ])

        result = {
            **index.to_dict(),
            "stocks": [stock.to_dict() for stock in stocks],
            "backtesting": report.performance_dict(),
            "alpha": one_year.alpha if one_year else 0.0,
        }

        logger.info(
            f"Generated index {index.id} '{index.name}' from {proposal.source}: "
            f"{len(stocks)} stocks, total value {summary.total_value:.2f}"
        )
        self.publisher.publish(make_event(NEW_INDEX, result))
        return result
