import json
import re
import time
from typing import Any, Dict, List

from fastapi import FastAPI
from pydantic import BaseModel

app = FastAPI(title="Mock LLM Server", version="1.0.0")

AMOUNT = re.compile(r"\$\s?([\d,]+(?:\.\d+)?)")
TIMEFRAMES = ("tomorrow", "this weekend", "next friday", "next week")


class ChatCompletionRequest(BaseModel):
    model: str
    messages: List[Dict[str, Any]]
    max_tokens: int | None = None
    response_format: Dict[str, Any] | None = None


@app.get("/health")
def health(): return {"status": "ok"}


def strict_intent(question: str) -> Dict[str, Any]:
    q = question.lower()
    amount = AMOUNT.search(question)
    if "afford" in q or "spend $" in q:
        if not amount:
            return {"intent": "unknown", "params": {}}
        params: Dict[str, Any] = {"amount": float(amount.group(1).replace(",", ""))}
        for phrase in TIMEFRAMES:
            if phrase in q:
                params["timeframe"] = phrase.replace(" ", "_")
        return {"intent": "affordability_check", "params": params}
    if any(word in q for word in ("lowest", "will", "forecast", "projected")):
        return {"intent": "projection_query", "params": {}}
    if "balance" in q or "how much do i have" in q:
        return {"intent": "balance_query", "params": {}}
    if "spending" in q or "burn" in q:
        return {"intent": "spending_query", "params": {}}
    return {"intent": "unknown", "params": {}}


def soft_intent(question: str) -> Dict[str, Any]:
    q = question.lower()
    if "left" in q or "situation" in q:
        return {"intent": "balance_query", "params": {}}
    if "trouble" in q or "okay" in q:
        return {"intent": "projection_query", "params": {}}
    if "swing" in q or "can i" in q:
        amount = AMOUNT.search(question)
        params = {"amount": float(amount.group(1).replace(",", ""))} if amount else {}
        return {"intent": "affordability_check", "params": params}
    if "money going" in q or "disappearing" in q:
        return {"intent": "spending_query", "params": {}}
    if "summary" in q:
        return {"intent": "general", "params": {}}
    return {"intent": "unknown", "params": {}}


@app.post("/v1/chat/completions")
def chat_completions(body: ChatCompletionRequest):
    system = next((m["content"] for m in body.messages if m["role"] == "system"), "")
    user = next((m["content"] for m in body.messages if m["role"] == "user"), "")

    if "permissive intent classifier" in system:
        content = json.dumps(soft_intent(user))
    elif "intent classifier" in system:
        content = json.dumps(strict_intent(user))
    else:
        content = f"Mock answer based on: {user.splitlines()[0]}"

    return {
        "id": "chatcmpl-mock",
        "object": "chat.completion",
        "created": int(time.time()),
        "model": body.model,
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
        ],
    }
