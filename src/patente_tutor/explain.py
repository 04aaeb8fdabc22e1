"""Short exam-oriented explanations of a term from Gemini."""
import asyncio

from google import genai
from loguru import logger

from patente_tutor.config import EXPLAIN_TIMEOUT, GEMINI_API_KEY, GEMINI_MODEL

EXPLANATION_PROMPT = (
    "你是意大利驾照考试专家。请简洁地解释单词 \"{term}\" 在意大利驾照考试中的具体含义、"
    "相关的交通法规或常见考点。使用中文回答，字数在100字以内。"
)

NO_EXPLANATION = "暂无AI解释。"
EXPLANATION_FAILED = "获取解释失败，请稍后重试。"


def build_prompt(term: str) -> str:
    return EXPLANATION_PROMPT.format(term=term.strip())


class ExplanationClient:
    """Fetch explanations; every failure resolves to a placeholder string."""

    def __init__(
        self,
        api_key: str | None = None,
        model_name: str = GEMINI_MODEL,
        timeout: float = EXPLAIN_TIMEOUT,
        client=None,
    ):
        """
        Args:
            api_key: Gemini API key (uses GEMINI_API_KEY env var if not provided)
            model_name: Model to use for generation
            timeout: Seconds to wait before giving up
            client: Pre-built ``genai.Client``-compatible object
        """
        self.api_key = api_key or GEMINI_API_KEY
        self.model_name = model_name
        self.timeout = timeout
        self._client = client

        if not self.is_available:
            logger.warning("No Gemini API key - explanations disabled")

    @property
    def is_available(self) -> bool:
        return self._client is not None or bool(self.api_key)

    def _get_client(self):
        # Each explain() runs under its own asyncio.run loop, so a fresh
        # client is built per call unless one was injected
        if self._client is not None:
            return self._client
        return genai.Client(api_key=self.api_key)

    async def explain(self, term: str) -> str:
        if not self.is_available:
            return EXPLANATION_FAILED
        try:
            response = await asyncio.wait_for(
                self._get_client().aio.models.generate_content(
                    model=self.model_name,
                    contents=build_prompt(term),
                ),
                timeout=self.timeout,
            )
            text = response.text
        except Exception as e:
            logger.error("Explanation for {!r} failed: {}", term, e)
            return EXPLANATION_FAILED
        return (text or "").strip() or NO_EXPLANATION
