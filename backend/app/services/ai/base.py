"""
Shared types for the language-model providers that propose index
constituents.

Every provider implements the ``CompanyProvider`` protocol and signals
failure by raising one of the exceptions below; the company generator turns
any failure into "try the next provider".
"""
import json
import re
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List, Protocol


MIN_COMPANIES = 6
MAX_COMPANIES = 10


# =============================================================================
# EXCEPTIONS
# =============================================================================

class AIAnalysisError(Exception):
    """Base exception for language-model provider errors."""
    pass


class RateLimitError(AIAnalysisError):
    """Provider rate limit hit."""
    def __init__(self, retry_after: Optional[int] = None):
        self.retry_after = retry_after
        super().__init__(
            f"Rate limit exceeded. Retry after {retry_after}s" if retry_after
            else "Rate limit exceeded"
        )


class BudgetExceededError(AIAnalysisError):
    """Daily budget exceeded."""
    pass


class ModelUnavailableError(AIAnalysisError):
    """Model was decommissioned or is unknown to the provider."""
    def __init__(self, model: str, detail: str = ""):
        self.model = model
        super().__init__(f"Model {model} unavailable: {detail}" if detail else f"Model {model} unavailable")


class InvalidResponseError(AIAnalysisError):
    """Provider returned an unparseable or incomplete response."""
    def __init__(self, message: str, raw_response: str = ""):
        self.raw_response = raw_response
        super().__init__(message)


# =============================================================================
# DATA CLASSES
# =============================================================================

@dataclass
class CompanyMatch:
    """One proposed constituent."""
    name: str
    symbol: Optional[str] = None
    sector: Optional[str] = None
    reasoning: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "symbol": self.symbol,
            "sector": self.sector,
            "reasoning": self.reasoning,
        }


@dataclass
class IndexProposal:
    """Index title, description and constituents for one prompt."""
    index_name: str
    description: str
    companies: List[CompanyMatch] = field(default_factory=list)
    source: str = "fallback"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "indexName": self.index_name,
            "description": self.description,
            "companies": [c.to_dict() for c in self.companies],
        }


@dataclass
class TokenUsage:
    """Track token usage for a single request."""
    input_tokens: int
    output_tokens: int
    model: str = ""

    def get_estimated_cost(self, input_cost_per_1k: float, output_cost_per_1k: float) -> float:
        return (
            (self.input_tokens / 1000) * input_cost_per_1k +
            (self.output_tokens / 1000) * output_cost_per_1k
        )


class CompanyProvider(Protocol):
    """Capability shared by every tier of the company generator."""

    name: str

    def is_available(self) -> bool:
        ...

    async def propose(self, prompt: str) -> IndexProposal:
        ...


# =============================================================================
# RESPONSE PARSER
# =============================================================================

class ResponseParser:
    """Parse and validate model replies."""

    @staticmethod
    def extract_json(response_text: str) -> Optional[Dict[str, Any]]:
        """
        Extract a JSON object from a model reply, handling markdown code blocks.
        """
        json_match = re.search(r'```(?:json)?\s*([\s\S]*?)\s*```', response_text)
        if json_match:
            json_str = json_match.group(1)
        else:
            json_match = re.search(r'(\{[\s\S]*\})', response_text)
            if json_match:
                json_str = json_match.group(1)
            else:
                return None

        try:
            return json.loads(json_str)
        except json.JSONDecodeError:
            # Trailing commas are the usual culprit
            json_str = re.sub(r',\s*}', '}', json_str)
            json_str = re.sub(r',\s*]', ']', json_str)
            try:
                return json.loads(json_str)
            except json.JSONDecodeError:
                return None

    @staticmethod
    def _clean(value: Any) -> Optional[str]:
        if value is None:
            return None
        text = str(value).strip()
        return text or None

    @classmethod
    def parse_index_proposal(cls, response_text: str, source: str) -> IndexProposal:
        """
        Strictly parse ``{indexName, description, companies[]}``.

        Raises InvalidResponseError on anything missing: a partial answer
        counts as a provider failure, not as a degraded result.
        """
        data = cls.extract_json(response_text or "")
        if not isinstance(data, dict):
            raise InvalidResponseError("Response is not a JSON object", raw_response=response_text or "")

        index_name = cls._clean(data.get("indexName"))
        description = cls._clean(data.get("description"))
        companies = data.get("companies")

        if not index_name or not description:
            raise InvalidResponseError("Missing indexName or description", raw_response=response_text)
        if not isinstance(companies, list):
            raise InvalidResponseError("companies is not a list", raw_response=response_text)

        matches = []
        for item in companies:
            if not isinstance(item, dict):
                continue
            name = cls._clean(item.get("name"))
            if not name:
                continue
            symbol = cls._clean(item.get("symbol"))
            matches.append(CompanyMatch(
                name=name,
                symbol=symbol.upper() if symbol else None,
                sector=cls._clean(item.get("sector")),
                reasoning=cls._clean(item.get("reasoning")),
            ))

        if len(matches) < MIN_COMPANIES:
            raise InvalidResponseError(
                f"Expected at least {MIN_COMPANIES} companies, got {len(matches)}",
                raw_response=response_text,
            )

        return IndexProposal(
            index_name=index_name,
            description=description,
            companies=matches[:MAX_COMPANIES],
            source=source,
        )
