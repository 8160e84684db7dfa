"""
AI helpers: per-report tag extraction and the daily team summary.

Both calls go to an OpenAI-compatible chat completion endpoint and expect a
JSON object back. Any failure (missing key, network, malformed JSON) is
logged and answered with a fallback payload so submission never blocks on AI.
"""
import json
import logging
import re

from django.conf import settings
from openai import OpenAI

logger = logging.getLogger(__name__)

SINGLE_REPORT_FALLBACK = {'tags': ['General'], 'feedback': None}

SUMMARY_FALLBACK = {
    'summary': 'Failed to generate summary.',
    'risks': 'Unknown.',
    'recommendations': 'Check API logs.',
    'keywords': [],
}


class AIUnavailable(RuntimeError):
    pass


def get_client():
    key = (getattr(settings, 'OPENAI_API_KEY', '') or '').strip()
    if not key:
        raise AIUnavailable("OPENAI_API_KEY is not configured")
    return OpenAI(api_key=key, timeout=getattr(settings, 'AI_REQUEST_TIMEOUT', 30))


def _complete_json(prompt, system=None):
    client = get_client()
    messages = []
    if system:
        messages.append({"role": "system", "content": system})
    messages.append({"role": "user", "content": prompt})
    response = client.chat.completions.create(
        model=getattr(settings, 'OPENAI_MODEL', 'gpt-4o-mini'),
        messages=messages,
        response_format={"type": "json_object"},
        temperature=0.3,
    )
    raw = (response.choices[0].message.content or "").strip()
    if not raw:
        raise ValueError("Empty response from model")
    # Strip markdown code block if present
    if raw.startswith("```"):
        raw = re.sub(r"^```(?:json)?\s*", "", raw)
        raw = re.sub(r"\s*```$", "", raw)
    data = json.loads(raw)
    if not isinstance(data, dict):
        raise ValueError("Model did not return a JSON object")
    return data


def _string_list(value, limit=None):
    if isinstance(value, str):
        value = re.split(r"[,，、]", value)
    if not isinstance(value, list):
        return []
    items = [str(v).strip() for v in value if str(v).strip()]
    return items[:limit] if limit else items


def analyze_single_report(today_work, problems, tomorrow_plan):
    """
    Extract 3-5 tags and flag vague reports.
    Returns {'tags': [...], 'feedback': str | None}.
    """
    prompt = (
        "Analyze this daily report:\n"
        f"TODAY: {today_work}\n"
        f"PROBLEMS: {problems}\n"
        f"PLAN: {tomorrow_plan}\n\n"
        "1. Extract 3-5 short technical or project-related tags/keywords.\n"
        "2. Check if the report is too vague (e.g., \"Worked on stuff\").\n\n"
        'Return JSON: { "tags": string[], "feedback": string | null }'
    )
    try:
        data = _complete_json(prompt)
    except AIUnavailable as exc:
        logger.info(f"Report analysis skipped: {exc}")
        return {'tags': list(SINGLE_REPORT_FALLBACK['tags']), 'feedback': None}
    except Exception as exc:
        logger.error(f"Report analysis failed: {exc}", exc_info=True)
        return {'tags': list(SINGLE_REPORT_FALLBACK['tags']), 'feedback': None}

    feedback = data.get('feedback')
    return {
        'tags': _string_list(data.get('tags'), limit=5),
        'feedback': str(feedback).strip() if feedback else None,
    }


def _format_reports(reports):
    blocks = []
    for r in reports:
        name = r.user.get_full_name() or r.user.username
        blocks.append(
            f"[Member: {name}]\n"
            f"- Work: {r.today_work}\n"
            f"- Issues: {r.problems}\n"
            f"- Plan: {r.tomorrow_plan}"
        )
    return "\n\n".join(blocks)


def generate_team_summary(reports, date):
    """
    Summarize a day's reports into summary / risks / recommendations / keywords.
    """
    system = "You are an expert operations manager."
    prompt = (
        f"I will give you all team members' daily reports for {date}.\n\n"
        f"REPORTS DATA:\n{_format_reports(reports)}\n\n"
        "Please generate a structured daily summary including:\n"
        "1. 【Team Summary】\n"
        "2. 【Key Risks】\n"
        "3. 【Recommendations】\n"
        "4. 【Keywords Cloud】 (5-10 items)\n\n"
        "Make the writing concise, professional, and suitable for internal reporting.\n"
        'Return the result as a JSON object with these exact keys: "summary", "risks", '
        '"recommendations", "keywords" (an array of strings).'
    )
    try:
        data = _complete_json(prompt, system=system)
    except AIUnavailable as exc:
        logger.warning(f"Team summary for {date} used fallback: {exc}")
        return {**SUMMARY_FALLBACK, 'keywords': []}
    except Exception as exc:
        logger.error(f"Team summary for {date} failed: {exc}", exc_info=True)
        return {**SUMMARY_FALLBACK, 'keywords': []}

    return {
        'summary': str(data.get('summary') or '').strip(),
        'risks': str(data.get('risks') or '').strip(),
        'recommendations': str(data.get('recommendations') or '').strip(),
        'keywords': _string_list(data.get('keywords'), limit=10),
    }
