"""
ai/gemini_insights.py
---------------------
Uses Google Gemini to turn the user's tasks and expenses into a short
natural-language analysis.

Responsibilities:
    - Serialize tasks and expenses into a prompt that asks for a fixed JSON shape.
    - Call the model (one blocking call, no retry).
    - Strip code-fence wrapping from the reply and parse it strictly.
"""

import json
import re
from typing import Any, Iterable

import google.generativeai as genai

from config import GEMINI_API_KEY, GEMINI_MODEL
from models.expense import Expense
from models.task import Task
from utils.errors import IntegrationFailure, InvalidResponseFormat
from utils.logger import get_logger

logger = get_logger(__name__)

# Configure the Gemini client once at module level
genai.configure(api_key=GEMINI_API_KEY)

_model = genai.GenerativeModel(GEMINI_MODEL)

MAX_RECOMMENDATIONS = 3

# ── Prompt for the AI ─────────────────────────────────────

_PROMPT = """You are a helpful AI assistant. Here is the user's data:
Tasks: {tasks}
Expenses: {expenses}

Generate a JSON object in the following exact format (NO code blocks, NO markdown, JUST pure JSON):

{{
  "summary": "write a 2-3 sentence summary of overall productivity and status.",
  "recommendations": ["suggest up to 3 next tasks or improvements"],
  "spendingInsight": "brief comment about monthly expenses or budgeting."
}}
Make sure output is **valid raw JSON only**, with no text before or after.
"""

_FENCE_OPEN = re.compile(r"^\s*```[A-Za-z0-9_-]*[ \t]*\n?")
_FENCE_CLOSE = re.compile(r"\n?[ \t]*```\s*$")


def build_prompt(tasks: Iterable[Task], expenses: Iterable[Expense]) -> str:
    """Embed the full task and expense collections in the analysis prompt."""
    return _PROMPT.format(
        tasks=json.dumps([t.to_dict() for t in tasks], indent=2, ensure_ascii=False),
        expenses=json.dumps([e.to_dict() for e in expenses], indent=2, ensure_ascii=False),
    )


def strip_code_fences(raw: str) -> str:
    """Remove a surrounding ```lang ... ``` wrapper, if any."""
    text = raw.strip()
    text = _FENCE_OPEN.sub("", text, count=1)
    text = _FENCE_CLOSE.sub("", text, count=1)
    return text.strip()


def _check_contract(data: Any) -> None:
    if not isinstance(data, dict):
        raise ValueError("reply is not a JSON object")
    for key in ("summary", "spendingInsight"):
        if not isinstance(data.get(key), str):
            raise ValueError(f"'{key}' must be a string")
    recs = data.get("recommendations")
    if not isinstance(recs, list) or not all(isinstance(r, str) for r in recs):
        raise ValueError("'recommendations' must be a list of strings")
    if len(recs) > MAX_RECOMMENDATIONS:
        raise ValueError(f"'recommendations' has more than {MAX_RECOMMENDATIONS} items")


def parse_insights(raw: str) -> dict:
    """
    Parse a model reply into the insight dict.

    Args:
        raw: The model's text, possibly wrapped in code fences.

    Returns:
        The parsed object, unchanged.

    Raises:
        InvalidResponseFormat: If the text is not JSON of the expected shape.
            The raw reply is logged, never attached to the error.
    """
    cleaned = strip_code_fences(raw or "")
    try:
        data = json.loads(cleaned)
        _check_contract(data)
    except ValueError as e:
        logger.warning(f"Gemini returned an invalid insight reply ({e}). Raw text:\n{raw}")
        raise InvalidResponseFormat("Failed to parse AI response as JSON.") from e
    return data


def _generate_text(prompt: str) -> str:
    """One blocking model call; returns the reply text."""
    response = _model.generate_content(
        prompt,
        generation_config=genai.GenerationConfig(temperature=0.4, max_output_tokens=1024),
    )
    return response.text


def generate_insights(tasks: Iterable[Task], expenses: Iterable[Expense]) -> dict:
    """
    Ask Gemini for a summary, up to three recommendations and a spending comment.

    Returns:
        Dict with keys: summary, recommendations, spendingInsight.

    Raises:
        IntegrationFailure: If the model could not be reached or errored.
        InvalidResponseFormat: If the reply does not honour the JSON contract.
    """
    prompt = build_prompt(list(tasks), list(expenses))
    try:
        raw = _generate_text(prompt)
    except Exception as e:
        logger.error(f"Gemini API error: {e}")
        raise IntegrationFailure(f"Gemini request failed: {e}") from e

    insights = parse_insights(raw)
    logger.info(f"Gemini insights parsed ({len(insights['recommendations'])} recommendations)")
    return insights
