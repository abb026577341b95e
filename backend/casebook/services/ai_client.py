"""
OpenAI-compatible chat completion client for report narratives.

Not configured (no API key) means every call returns None and reports are
produced without an AI section.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

import httpx

from casebook.config import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()

SUMMARY_SYSTEM_PROMPT = (
    "You write concise, objective narratives for youth residential program reports. "
    "Use neutral tone, past tense. Focus on facts and observed behavior. Avoid speculation."
)
ENHANCE_SYSTEM_PROMPT = (
    "You are a professional clinical documentation assistant for a residential youth program. "
    "Rewrite staff text so it is clear, objective and professional. Keep every fact; add none."
)
MAX_NOTES_IN_PROMPT = 50


class AIServiceError(Exception):
    """Raised when the completion service answers with an error."""


@dataclass
class SummaryRequest:
    report_type: str
    youth_name: str
    level: Optional[int]
    period_label: str
    points_total: int = 0
    ratings: dict = field(default_factory=dict)
    notes: list[dict] = field(default_factory=list)  # {date, category, note}


def build_summary_prompt(request: SummaryRequest) -> str:
    notes_text = "\n".join(
        f"- {n.get('date') or ''} "
        + (f"[{n['category']}] " if n.get("category") else "")
        + (n.get("note") or "")
        for n in request.notes[:MAX_NOTES_IN_PROMPT]
    )
    ratings = request.ratings
    return (
        f"Report Type: {request.report_type}\n"
        f"Period: {request.period_label}\n\n"
        f"Youth: {request.youth_name} (Level {request.level if request.level is not None else 'N/A'})\n\n"
        f"Ratings averages (if provided): peer={ratings.get('peer', 'N/A')}, "
        f"adult={ratings.get('adult', 'N/A')}, investment={ratings.get('investment', 'N/A')}, "
        f"authority={ratings.get('authority', 'N/A')}\n"
        f"Total points in period: {request.points_total}\n\n"
        f"Notes (chronological highlights):\n{notes_text}\n\n"
        "Task: Draft a 150-220 word narrative summarizing participation, behavior trends, "
        "notable incidents (if any), and 2-3 actionable recommendations. Do not include headers. "
        "Return plain paragraphs."
    )


class AIClient:
    """Thin async wrapper around ``/chat/completions``."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            api_key: Bearer token; defaults to settings.openai_api_key
            model: Model name; defaults to settings.openai_model
            base_url: API root; defaults to settings.openai_base_url
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests use MockTransport)
        """
        self.api_key = api_key if api_key is not None else settings.openai_api_key
        self.model = model or settings.openai_model
        self.base_url = (base_url or settings.openai_base_url).rstrip("/")
        self.timeout = timeout or settings.ai_timeout
        self.transport = transport

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    async def _complete(self, system: str, user: str, temperature: float = 0.4, max_tokens: int = 500) -> Optional[str]:
        if not self.configured:
            logger.debug("AI completion skipped: no API key configured")
            return None

        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
            "temperature": temperature,
            "max_tokens": max_tokens,
        }
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(
                    f"{self.base_url}/chat/completions",
                    json=payload,
                    headers={"Authorization": f"Bearer {self.api_key}"},
                )
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            raise AIServiceError(f"Upstream AI error {e.response.status_code}: {e.response.text[:200]}") from e
        except httpx.HTTPError as e:
            raise AIServiceError(f"AI request failed: {e}") from e

        try:
            return (data["choices"][0]["message"]["content"] or "").strip()
        except (KeyError, IndexError, TypeError) as e:
            raise AIServiceError("Malformed AI response") from e

    async def summarize_report(self, request: SummaryRequest) -> Optional[str]:
        """Narrative summary for a report period, or None when AI is not configured."""
        return await self._complete(SUMMARY_SYSTEM_PROMPT, build_summary_prompt(request))

    async def enhance_text(self, text: str, context: str = "case note") -> Optional[str]:
        """Rewrite staff-entered text in a professional register."""
        if not text.strip():
            return text
        user = f"Rewrite this {context}:\n\n{text}"
        return await self._complete(ENHANCE_SYSTEM_PROMPT, user, temperature=0.3, max_tokens=800)


def get_ai_client() -> AIClient:
    return AIClient()
