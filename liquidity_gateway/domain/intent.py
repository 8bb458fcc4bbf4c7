"""Two-pass intent classification against an external text classifier"""

import json
import logging
from typing import Protocol
from liquidity_gateway.domain.models import Intent, IntentResult
from liquidity_gateway.prompts import CHAT_INTENT_PROMPT, CHAT_SOFT_INTENT_PROMPT

logger = logging.getLogger(__name__)


class Classifier(Protocol):
    """Anything that answers (system instructions, question) with response text"""

    async def classify(self, system_instructions: str, question: str) -> str:
        ...


def parse_intent_response(text: str | None, passes: int = 1) -> IntentResult:
    """
    Read classifier output as {"intent": ..., "params": {...}}.

    Never raises: non-JSON text, a non-object, an intent outside the closed
    set or non-object params all yield the unknown sentinel. A missing
    params key reads as {}.
    """
    if not text:
        return IntentResult.unknown(passes)

    try:
        payload = json.loads(text)
    except (TypeError, ValueError):
        logger.warning("Classifier returned non-JSON output", extra={"raw_output": text[:200]})
        return IntentResult.unknown(passes)

    if not isinstance(payload, dict):
        return IntentResult.unknown(passes)

    try:
        intent = Intent(payload.get("intent"))
    except ValueError:
        return IntentResult.unknown(passes)

    params = payload.get("params")
    if params is None:
        params = {}
    if not isinstance(params, dict):
        return IntentResult.unknown(passes)

    return IntentResult(intent=intent, params=params, passes=passes)


async def extract_intent(question: str, classifier: Classifier) -> IntentResult:
    """
    Classify a question with at most two classifier calls.

    Flow:
    1. Strict pass; any intent other than unknown is final
    2. Permissive pass, only after an unknown
    3. Guard: a second-pass affordability_check without an amount is
       downgraded to unknown so it can never be dispatched

    Raises:
        LLMServiceError: Propagated from the classifier on transport failure
    """
    first = parse_intent_response(await classifier.classify(CHAT_INTENT_PROMPT, question), passes=1)
    if first.intent is not Intent.UNKNOWN:
        return first

    second = parse_intent_response(await classifier.classify(CHAT_SOFT_INTENT_PROMPT, question), passes=2)
    if second.intent is Intent.UNKNOWN:
        return IntentResult.unknown(passes=2)

    if second.intent is Intent.AFFORDABILITY_CHECK and second.params.get("amount") is None:
        logger.info("Second-pass affordability_check without amount downgraded to unknown")
        return IntentResult.unknown(passes=2)

    return second
