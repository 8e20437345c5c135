from __future__ import annotations

from collections import Counter
from typing import Any


def compute_analytics(events: list[dict[str, Any]]) -> dict[str, Any]:
    searches = [e for e in events if e["type"] == "search"]
    total = len(searches)

    successful = sum(1 for s in searches if s.get("status") == "success")
    failed = total - successful

    # Only searches that reached Gemini carry a response time
    times = [s["response_time_ms"] for s in searches if "response_time_ms" in s]
    avg_time = round(sum(times) / len(times), 1) if times else 0.0

    query_counter: Counter[str] = Counter()
    for s in searches:
        query = (s.get("query") or "").strip().lower()
        if query:
            query_counter[query] += 1
    top_queries = [{"query": q, "count": c} for q, c in query_counter.most_common(10)]

    sources = [s.get("sources_count", 0) for s in searches if s.get("status") == "success"]
    avg_sources = round(sum(sources) / len(sources), 1) if sources else 0.0

    return {
        "total_searches": total,
        "successful": successful,
        "failed": failed,
        "success_rate": round(successful / total * 100, 1) if total else 0.0,
        "avg_response_time_ms": avg_time,
        "avg_sources_per_answer": avg_sources,
        "top_queries": top_queries,
    }
