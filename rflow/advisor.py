"""Narrative plan assessment through a remote language model."""

from __future__ import annotations

import json
import logging
import os
from typing import Any

import requests

from .engine import SimulationResult, round_currency
from .schema import FinancialSettings

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_TIMEOUT = 30.0
API_URL = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"
API_KEY_ENV_VARS = ("GEMINI_API_KEY", "API_KEY")

SYSTEM_INSTRUCTION = "You are an expert retirement analyst focused on strategic financial advice."
TEMPERATURE = 0.7
SAMPLE_EVERY = 5

EMPTY_RESPONSE_TEXT = "Unable to generate analysis."
ERROR_TEXT = "An error occurred while generating the analysis. Please try again."


def summarize_trajectory(settings: FinancialSettings, result: SimulationResult) -> list[dict[str, int]]:
    """Every fifth year plus the retirement year and any year with nothing left."""
    return [
        {"age": row.age, "balance": row.portfolio_balance, "shortfall": row.shortfall}
        for idx, row in enumerate(result.data)
        if idx % SAMPLE_EVERY == 0 or row.age == settings.retirement_age or row.portfolio_balance <= 0
    ]


def build_prompt(settings: FinancialSettings, result: SimulationResult) -> str:
    depletion = str(result.depletion_age) if result.depletion_age is not None else "N/A (funds lasted)"
    sample = json.dumps(summarize_trajectory(settings, result))
    return (
        "Act as a senior financial planner reviewing a client's retirement projection.\n\n"
        "Client profile:\n"
        f"- Current age: {settings.current_age}\n"
        f"- Target retirement age: {settings.retirement_age}\n"
        f"- Monthly spending goal (today's dollars): ${settings.monthly_spending:,.0f}\n"
        f"- Inflation assumption: {settings.inflation_rate}%\n\n"
        "Projection outcome:\n"
        f"- Portfolio depleted: {'yes' if not result.success else 'no'}\n"
        f"- Depletion age: {depletion}\n"
        f"- Final balance at age {settings.planning_horizon}: ${round_currency(result.final_balance):,}\n\n"
        "Trajectory sample (age, balance, shortfall):\n"
        f"{sample}\n\n"
        "Give a concise, professional assessment:\n"
        "1. A status verdict: On Track, At Risk, or Needs Action.\n"
        "2. Two or three key strengths or weaknesses.\n"
        "3. Specific actions that would improve the plan, such as saving more or retiring later.\n"
        "Keep the tone encouraging but realistic and stay under 300 words."
    )


def _request_body(prompt: str) -> dict[str, Any]:
    return {
        "systemInstruction": {"parts": [{"text": SYSTEM_INSTRUCTION}]},
        "contents": [{"role": "user", "parts": [{"text": prompt}]}],
        "generationConfig": {"temperature": TEMPERATURE},
    }


def _response_text(payload: dict[str, Any]) -> str:
    candidates = payload.get("candidates") or []
    if not isinstance(candidates, list):
        raise ValueError("candidates: expected array")
    if not candidates:
        return ""
    parts = (candidates[0].get("content") or {}).get("parts") or []
    return "".join(part.get("text", "") for part in parts).strip()


def resolve_api_key(api_key: str | None = None) -> str | None:
    if api_key:
        return api_key
    for name in API_KEY_ENV_VARS:
        value = os.environ.get(name)
        if value:
            return value
    return None


def analyze_plan(
    settings: FinancialSettings,
    result: SimulationResult,
    *,
    api_key: str | None = None,
    model: str = DEFAULT_MODEL,
    timeout: float = DEFAULT_TIMEOUT,
    session: requests.Session | None = None,
) -> str:
    """Ask the model for commentary; failures come back as a fallback message, never an exception."""
    key = resolve_api_key(api_key)
    if key is None:
        logger.warning("No API key configured; set one of %s", ", ".join(API_KEY_ENV_VARS))
        return ERROR_TEXT

    http = session or requests.Session()
    try:
        response = http.post(
            API_URL.format(model=model),
            headers={"x-goog-api-key": key, "Content-Type": "application/json"},
            json=_request_body(build_prompt(settings, result)),
            timeout=timeout,
        )
        response.raise_for_status()
        text = _response_text(response.json())
    except (requests.RequestException, ValueError, AttributeError, TypeError) as exc:
        logger.error("Advisory request failed: %s", exc)
        return ERROR_TEXT
    finally:
        if session is None:
            http.close()

    if not text:
        logger.info("Advisory response contained no text")
        return EMPTY_RESPONSE_TEXT
    return text
