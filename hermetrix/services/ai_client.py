import base64
import json
import logging
import time

from openai import APIConnectionError, APIError, AuthenticationError, OpenAI, RateLimitError
from pydantic import ValidationError

from hermetrix.core.config import get_openai_keys, settings
from hermetrix.schemas.ai import ExtractionResult, InsightSuggestion, RiskResult, TaskSuggestion
from hermetrix.services.chat_fallback import fallback_response
from hermetrix.services.pdf_extract import UnreadablePdf, extract_text_from_pdf

logger = logging.getLogger(__name__)

# One client per key (multi-key failover)
_openai_clients: dict[str, OpenAI] = {}

# A key failing with one of these hands over to the next key
OPENAI_FALLBACK_EXCEPTIONS = (AuthenticationError, RateLimitError)


class AIServiceError(Exception):
    """The hosted model could not be reached or refused the request."""


class AIResponseError(AIServiceError):
    """The model answered, but with an empty or unusable body."""


class AINotConfigured(AIServiceError):
    pass


def _get_client_for_key(key: str) -> OpenAI:
    if key not in _openai_clients:
        _openai_clients[key] = OpenAI(api_key=key, timeout=settings.openai_timeout)
    return _openai_clients[key]


def _openai_create_with_fallback(create_fn):
    """
    Calls create_fn(client); on AuthenticationError or RateLimitError moves on to the next key.
    Raises AIServiceError once every key has failed.
    """
    keys = get_openai_keys()
    if not keys:
        raise AINotConfigured("OPENAI_API_KEY is not set or invalid. Add OPENAI_API_KEY=sk-... or OPENAI_API_KEYS=sk-1,sk-2 to .env.")
    last_exc: Exception | None = None
    for key in keys:
        try:
            return create_fn(_get_client_for_key(key))
        except OPENAI_FALLBACK_EXCEPTIONS as e:
            last_exc = e
            logger.warning("OpenAI key skipped (%s), trying next: %s", key[:12] + "...", e)
            continue
        except (APIConnectionError, APIError) as e:
            raise AIServiceError(f"AI service error: {type(e).__name__}") from e
    raise AIServiceError(f"All OpenAI keys failed: {type(last_exc).__name__}") from last_exc


def ping_openai() -> tuple[bool, float, str | None]:
    """
    One-token request for /health/ai. Walks the keys like the real calls do.
    Returns: (success, latency_ms, error_message_or_none)
    """
    t0 = time.perf_counter()
    last_err: str | None = None
    for key in get_openai_keys():
        try:
            _get_client_for_key(key).chat.completions.create(
                model=settings.openai_model,
                messages=[{"role": "user", "content": "Hi"}],
                max_tokens=1,
            )
            return (True, round((time.perf_counter() - t0) * 1000, 2), None)
        except Exception as e:
            last_err = str(e).strip()[:500] if str(e) else type(e).__name__
            if isinstance(e, OPENAI_FALLBACK_EXCEPTIONS):
                continue
            return (False, round((time.perf_counter() - t0) * 1000, 2), last_err)
    return (False, round((time.perf_counter() - t0) * 1000, 2), last_err or "No usable OpenAI key.")


def _json_completion(messages: list[dict], operation: str):
    """Single JSON-mode completion. Empty or non-JSON bodies are hard failures."""

    def _create(client: OpenAI):
        return client.chat.completions.create(
            model=settings.openai_model,
            messages=messages,
            response_format={"type": "json_object"},
        )

    response = _openai_create_with_fallback(_create)
    raw = (response.choices[0].message.content or "").strip() if response.choices else ""
    if not raw:
        raise AIResponseError(f"Empty response from model ({operation})")
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise AIResponseError(f"Model returned invalid JSON ({operation})") from e


def _items(payload, key: str) -> list:
    """JSON mode returns objects, so lists usually arrive wrapped: {"tasks": [...]}."""
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        value = payload.get(key)
        if isinstance(value, list):
            return value
        for value in payload.values():
            if isinstance(value, list):
                return value
    raise AIResponseError(f"Expected a list of {key}")


def _dump(data) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False, default=str)


EXTRACTION_PROMPT = """You are a medical data extraction expert. Analyze this medical report and extract ALL key health parameters.

Respond with a JSON object in exactly this shape:
{
  "parameters": [
    {
      "name": "parameter name (e.g., TSH, Free T3, Free T4, LH, FSH, Testosterone, Insulin, etc.)",
      "value": "numeric value only",
      "unit": "unit of measurement",
      "referenceRange": "normal range if shown",
      "status": "Normal/High/Low based on reference range"
    }
  ],
  "reportType": "type of test (e.g., Thyroid Panel, Hormone Panel, PCOS Markers, etc.)",
  "testDate": "date of test if available",
  "summary": "brief 1-2 sentence summary of key findings"
}

Focus especially on:
- Thyroid markers (TSH, T3, T4, Free T3, Free T4)
- PCOS/PCOD markers (LH, FSH, Testosterone, DHEA-S, Prolactin, AMH)
- Metabolic markers (Insulin, Glucose, HbA1c, Lipid panel)
- Hormone levels (Estrogen, Progesterone)
- Vitamin levels (Vitamin D, B12)

Value vs reference: value < min → Low; value > max → High; min ≤ value ≤ max → Normal.
Be thorough and extract ALL parameters you can find."""

RISK_PROMPT = """You are a women's health risk assessment expert. Based on the following medical data and symptom assessment, calculate a health risk score.

Medical Data:
{extracted}

Assessment Answers:
{answers}

Respond with a JSON object:
{{
  "score": number between 0-100 (0 = very low risk, 100 = very high risk),
  "riskLevel": "Low" or "Moderate" or "High",
  "interpretation": "A clear, supportive 2-3 sentence explanation of what this score means and what the person should consider."
}}

Consider hormonal imbalances indicating PCOS/PCOD risk, thyroid dysfunction markers, metabolic health indicators,
symptom severity and frequency, and lifestyle factors. Provide a balanced, medically-informed assessment."""

TASKS_PROMPT = """You are a personalized health coach for women. Based on this medical data and risk assessment, create 4-6 specific, actionable daily health tasks.

Medical Data:
{extracted}

Risk Score: {score}/100 ({level})

Respond with a JSON object:
{{
  "tasks": [
    {{
      "taskType": "water" or "exercise" or "medication" or "protein" or "sleep" or "stress",
      "description": "Clear, specific task description",
      "target": "Specific measurable target (e.g., '2 liters', '30 minutes', '100g')"
    }}
  ]
}}

Cover hydration, physical activity suited to their condition, diet (protein, anti-inflammatory foods),
stress management, sleep quality and any medication reminders. Keep tasks supportive and achievable."""

INSIGHTS_PROMPT = """You are a compassionate women's health educator. Based on this medical data and assessment, generate 3-5 personalized health insights.

Medical Data:
{extracted}

Assessment Answers:
{answers}

Respond with a JSON object:
{{
  "insights": [
    {{
      "category": "Hormonal" or "Metabolic" or "Lifestyle" or "Thyroid" or "Nutrition",
      "title": "Brief, clear insight title (5-8 words)",
      "content": "Supportive, educational explanation (2-3 sentences) about what this means and what they can do about it.",
      "severity": "Info" or "Warning" or "Important"
    }}
  ]
}}

Focus on key lab findings, symptom patterns, contributing lifestyle factors and actionable recommendations.
Avoid medical jargon. Be practical and hopeful."""

CHAT_SYSTEM_PROMPT = """You are HERmetrix's compassionate and knowledgeable AI Health Assistant. You specialize in women's health, particularly:
- PCOS/PCOD management and lifestyle optimization
- Thyroid health and hormonal balance
- Symptom management and wellness strategies
- Nutrition, exercise, and stress management for women's health
- Medical report interpretation and health insights

Guidelines:
1. Be empathetic and supportive while maintaining medical accuracy
2. Provide evidence-based advice and recommendations
3. Encourage users to consult healthcare providers for serious concerns
4. Explain medical concepts in simple, non-technical language
5. Offer actionable, practical advice
6. Remember context from previous messages in the conversation

Never diagnose conditions or replace professional medical advice."""


def _extraction_messages(content: bytes, mime_type: str) -> list[dict]:
    if mime_type == "application/pdf":
        try:
            text = extract_text_from_pdf(content)
        except UnreadablePdf as e:
            raise AIResponseError(str(e)) from e
        if not text:
            raise AIResponseError("No readable text in PDF")
        return [{"role": "user", "content": EXTRACTION_PROMPT + "\n\nReport text:\n" + text}]
    b64 = base64.standard_b64encode(content).decode("utf-8")
    url = f"data:{mime_type};base64,{b64}"
    return [
        {
            "role": "system",
            "content": "You read lab reports from images. Always read the values in the image and answer with the requested JSON.",
        },
        {
            "role": "user",
            "content": [
                {"type": "text", "text": EXTRACTION_PROMPT},
                {"type": "image_url", "image_url": {"url": url, "detail": "high"}},
            ],
        },
    ]


def extract_parameters(content: bytes, mime_type: str) -> tuple[dict, ExtractionResult]:
    """Lab parameters from an uploaded report. Returns the raw payload (stored as is) and its parsed form."""
    try:
        payload = _json_completion(_extraction_messages(content, mime_type), "extract_parameters")
        if not isinstance(payload, dict):
            raise AIResponseError("Expected a JSON object")
        return payload, ExtractionResult.model_validate(payload)
    except ValidationError as e:
        raise AIResponseError(f"Unexpected extraction payload: {e.error_count()} errors") from e
    except AIServiceError:
        logger.exception("Medical report extraction failed")
        raise


def score_risk(extracted_data: dict | None, answers: dict) -> RiskResult:
    prompt = RISK_PROMPT.format(extracted=_dump(extracted_data), answers=_dump(answers))
    payload = _json_completion([{"role": "user", "content": prompt}], "score_risk")
    try:
        return RiskResult.model_validate(payload)
    except ValidationError as e:
        raise AIResponseError("Unexpected risk score payload") from e


def generate_tasks(extracted_data: dict | None, risk: RiskResult) -> list[TaskSuggestion]:
    prompt = TASKS_PROMPT.format(extracted=_dump(extracted_data), score=risk.score, level=risk.risk_level)
    payload = _json_completion([{"role": "user", "content": prompt}], "generate_tasks")
    tasks = []
    for item in _items(payload, "tasks"):
        try:
            tasks.append(TaskSuggestion.model_validate(item))
        except ValidationError:
            logger.warning("Skipping malformed task item: %r", item)
    return tasks


def generate_insights(extracted_data: dict | None, answers: dict) -> list[InsightSuggestion]:
    prompt = INSIGHTS_PROMPT.format(extracted=_dump(extracted_data), answers=_dump(answers))
    payload = _json_completion([{"role": "user", "content": prompt}], "generate_insights")
    insights = []
    for item in _items(payload, "insights"):
        try:
            insights.append(InsightSuggestion.model_validate(item))
        except ValidationError:
            logger.warning("Skipping malformed insight item: %r", item)
    return insights


def chat_reply(message: str, history: list[dict]) -> str:
    """Free-text answer. Never raises: any failure falls back to a canned topic response."""
    messages = [{"role": "system", "content": CHAT_SYSTEM_PROMPT}]
    for h in history:
        role = "assistant" if h.get("role") == "assistant" else "user"
        messages.append({"role": role, "content": h.get("content") or ""})
    messages.append({"role": "user", "content": message})

    def _create(client: OpenAI):
        return client.chat.completions.create(model=settings.openai_model, messages=messages)

    try:
        response = _openai_create_with_fallback(_create)
        content = (response.choices[0].message.content or "").strip()
        if not content:
            raise AIResponseError("Empty response from model (chat_reply)")
        return content
    except Exception as e:
        logger.warning("Chat reply fell back to canned response: %s", e)
        return fallback_response(message)
