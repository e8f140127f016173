from __future__ import annotations

import json
import logging
import os
from typing import Callable, Optional, Sequence

from langchain_community.llms import HuggingFaceEndpoint
from langchain_core.prompts import PromptTemplate

from splitcast_core.domain.models import ExpenseRecord, MonthlySummary

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "mistralai/Mistral-7B-Instruct-v0.2"
FALLBACK_MESSAGE = (
    "Could not generate insights right now. Check your connection or credentials and try again later."
)

TEMPLATE = """
You are a financial advisor specialised in expense control and personal planning.

Analyse the following personal finance data:
- total expenses recorded: {record_count}
- monthly summary: {summary}

Give 3 practical tips to improve financial health, focusing on the balance
between cash and installment spending. Answer in {language}.
"""

Generator = Callable[[str], str]


def _language_for(locale: Optional[str]) -> str:
    return "Brazilian Portuguese" if (locale or "pt-BR") == "pt-BR" else "English"


def build_prompt(records: Sequence[ExpenseRecord], summaries: Sequence[MonthlySummary], locale: Optional[str] = None) -> str:
    prompt = PromptTemplate.from_template(TEMPLATE)
    return prompt.format(
        record_count=len(records),
        summary=json.dumps([s.to_dict() for s in summaries]),
        language=_language_for(locale),
    )


def huggingface_generator(model: Optional[str] = None) -> Generator:
    """Text generator backed by the Hugging Face inference endpoint (HF_TOKEN)."""

    def _generate(prompt: str) -> str:
        hf_token = os.environ.get("HF_TOKEN")
        if not hf_token:
            raise RuntimeError("HF_TOKEN is not set")
        llm = HuggingFaceEndpoint(
            repo_id=model or os.environ.get("HF_MODEL", DEFAULT_MODEL),
            huggingfacehub_api_token=hf_token,
            temperature=0.4,
            max_new_tokens=300,
        )
        return llm.invoke(prompt)

    return _generate


def generate_insights(
    records: Sequence[ExpenseRecord],
    summaries: Sequence[MonthlySummary],
    generator: Optional[Generator] = None,
    locale: Optional[str] = None,
) -> str:
    """
    Asks a text-generation backend for tips about the recorded spending.
    Never raises: any failure is logged and the fallback message returned.
    """
    generator = generator or huggingface_generator()
    try:
        prompt = build_prompt(records, summaries, locale)
        text = generator(prompt)
    except Exception:  # noqa: BLE001
        logger.exception("Insight generation failed")
        return FALLBACK_MESSAGE
    text = (text or "").strip()
    if not text:
        logger.warning("Insight generation returned an empty response")
        return FALLBACK_MESSAGE
    return text
