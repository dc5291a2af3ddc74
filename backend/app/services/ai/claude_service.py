"""
Claude index builder - primary language-model tier for company proposals.

Features:
- Strict JSON parsing of {indexName, description, companies}
- Daily cost tracking with a budget ceiling
- Typed failures so the company generator can move to the next tier
"""
from datetime import datetime
from typing import Optional, Dict, Tuple
from dataclasses import dataclass, field

import anthropic
from loguru import logger

from app.config import get_settings
from app.services.ai.base import (
    AIAnalysisError,
    RateLimitError,
    BudgetExceededError,
    IndexProposal,
    ResponseParser,
    TokenUsage,
)
from app.services.ai.prompts import SYSTEM_PROMPT_INDEX_BUILDER, build_index_prompt


@dataclass
class CostTracker:
    """Track daily API costs."""
    daily_costs: Dict[str, float] = field(default_factory=dict)
    daily_requests: Dict[str, int] = field(default_factory=dict)

    def _get_today(self) -> str:
        return datetime.now().date().isoformat()

    def add_usage(self, usage: TokenUsage, cost: float) -> float:
        """Record token usage and return cost."""
        today = self._get_today()

        # New day: drop yesterday's totals
        if today not in self.daily_costs:
            self.daily_costs = {today: 0.0}
            self.daily_requests = {today: 0}

        self.daily_costs[today] += cost
        self.daily_requests[today] += 1

        logger.debug(
            f"Claude call: {usage.input_tokens} in, {usage.output_tokens} out, "
            f"${cost:.4f} (daily total: ${self.daily_costs[today]:.4f})"
        )
        return cost

    def get_daily_cost(self) -> float:
        return self.daily_costs.get(self._get_today(), 0.0)

    def get_daily_requests(self) -> int:
        return self.daily_requests.get(self._get_today(), 0)

    def check_budget(self, budget: float) -> bool:
        return self.get_daily_cost() < budget


class ClaudeIndexService:
    """Proposes index constituents with Claude."""

    name = "claude"

    def __init__(self, settings=None):
        self.settings = settings or get_settings()
        self.client: Optional[anthropic.AsyncAnthropic] = None
        self.cost_tracker = CostTracker()
        self.parser = ResponseParser()

        if self.settings.ANTHROPIC_API_KEY:
            self.client = anthropic.AsyncAnthropic(
                api_key=self.settings.ANTHROPIC_API_KEY,
                timeout=self.settings.AI_PROVIDER_TIMEOUT_SECONDS,
                max_retries=0,
            )
            logger.info(f"Claude index builder ready (model: {self.settings.CLAUDE_MODEL_PRIMARY})")

    def is_available(self) -> bool:
        return self.client is not None

    async def _call_claude(self, prompt: str) -> Tuple[str, TokenUsage]:
        """Single Claude call; raises on any failure."""
        if not self.cost_tracker.check_budget(self.settings.CLAUDE_DAILY_BUDGET):
            raise BudgetExceededError(
                f"Daily budget exceeded. Spent: ${self.cost_tracker.get_daily_cost():.2f}"
            )

        model = self.settings.CLAUDE_MODEL_PRIMARY
        try:
            response = await self.client.messages.create(
                model=model,
                max_tokens=self.settings.CLAUDE_MAX_TOKENS,
                temperature=0.3,
                system=SYSTEM_PROMPT_INDEX_BUILDER,
                messages=[{"role": "user", "content": prompt}],
            )
        except anthropic.RateLimitError as e:
            raise RateLimitError() from e
        except anthropic.APIError as e:
            raise AIAnalysisError(f"Claude API error: {e}") from e

        if not response.content:
            raise AIAnalysisError("Claude returned an empty response")

        usage = TokenUsage(
            input_tokens=response.usage.input_tokens,
            output_tokens=response.usage.output_tokens,
            model=model,
        )
        cost = usage.get_estimated_cost(
            self.settings.CLAUDE_COST_PER_1K_INPUT_TOKENS,
            self.settings.CLAUDE_COST_PER_1K_OUTPUT_TOKENS,
        )
        self.cost_tracker.add_usage(usage, cost)

        return response.content[0].text, usage

    async def propose(self, prompt: str) -> IndexProposal:
        if not self.is_available():
            raise AIAnalysisError("Claude service not available")

        text, _ = await self._call_claude(build_index_prompt(prompt))
        return self.parser.parse_index_proposal(text, source=self.name)

    def get_usage_stats(self) -> Dict[str, float]:
        return {
            "daily_cost": round(self.cost_tracker.get_daily_cost(), 4),
            "daily_requests": self.cost_tracker.get_daily_requests(),
            "daily_budget": self.settings.CLAUDE_DAILY_BUDGET,
        }


_claude_service: Optional[ClaudeIndexService] = None


def get_claude_service() -> ClaudeIndexService:
    global _claude_service
    if _claude_service is None:
        _claude_service = ClaudeIndexService()
    return _claude_service
