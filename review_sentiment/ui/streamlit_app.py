"""
Streamlit page that asks the FastAPI service to analyze a random review.
"""

from __future__ import annotations

from typing import Any, Dict

import httpx
import streamlit as st

from review_sentiment.config import load_settings
from review_sentiment.presentation import quote_review

# API URL provided via environment (docker-compose), .env, or default localhost
API_URL = load_settings().api_url
_READY_LABEL = "Analyze Random Review"


def main() -> None:
    st.set_page_config(page_title="Review Sentiment Analyzer", layout="centered")
    st.title("Review Sentiment Analyzer")
    st.caption("Pick a random review and classify it with a hosted sentiment model.")

    if "reviews_status" not in st.session_state:
        st.session_state.reviews_status = _load_reviews_status()
    if "last_result" not in st.session_state:
        st.session_state.last_result = None
    if "last_error" not in st.session_state:
        st.session_state.last_error = None

    status = st.session_state.reviews_status
    api_token = st.text_input(
        "Hugging Face API token (optional)",
        type="password",
        help="Anonymous calls share a small quota; a token raises the rate limit.",
    )

    ready = status.get("ready", False)
    button_label = _READY_LABEL if ready else "Failed to load reviews"
    if st.button(button_label, disabled=not ready, type="primary"):
        st.session_state.last_error = None
        st.session_state.last_result = None
        with st.spinner("Analyzing..."):
            result, error = _call_api(api_token)
        st.session_state.last_result = result
        st.session_state.last_error = error

    if not ready and status.get("error"):
        st.error(status["error"])
    if st.session_state.last_error:
        st.error(st.session_state.last_error)
    if st.session_state.last_result:
        _render_result(st.session_state.last_result)


def _load_reviews_status() -> Dict[str, Any]:
    try:
        with httpx.Client(timeout=10.0) as client:
            response = client.get(f"{API_URL}/reviews")
            if response.status_code == 503:
                return {"ready": False, "error": _error_detail(response)}
            response.raise_for_status()
            return {"ready": True, "count": response.json().get("count", 0)}
    except httpx.RequestError as exc:
        return {"ready": False, "error": f"Failed to reach API: {exc}"}
    except httpx.HTTPStatusError as exc:
        return {"ready": False, "error": f"API error {exc.response.status_code}: {exc.response.text}"}


def _call_api(api_token: str) -> tuple[Dict[str, Any] | None, str | None]:
    payload: Dict[str, Any] = {}
    if api_token.strip():
        payload["api_token"] = api_token.strip()
    try:
        with httpx.Client(timeout=60.0) as client:
            response = client.post(f"{API_URL}/analyze", json=payload)
            response.raise_for_status()
            return response.json(), None
    except httpx.RequestError as exc:
        return None, f"Analysis failed: {exc}"
    except httpx.HTTPStatusError as exc:
        return None, _error_detail(exc.response)


def _error_detail(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    detail = body.get("detail") if isinstance(body, dict) else None
    if isinstance(detail, str) and detail:
        return detail
    return f"API error {response.status_code}: {response.text}"


def _render_result(result: Dict[str, Any]) -> None:
    st.subheader("Review")
    st.write(quote_review(result.get("review", "")))
    st.subheader("Sentiment")
    st.markdown(f"### {result.get('emoji', '')} {result.get('label', 'Neutral')}")
    logs = result.get("logs") or []
    if logs:
        with st.expander("Processing steps"):
            st.code("\n".join(logs))
            markdown = result.get("log_markdown") or ""
            if markdown:
                st.download_button(
                    "Download pipeline trace",
                    data=markdown,
                    file_name="analysis_trace.md",
                    mime="text/markdown",
                )


if __name__ == "__main__":
    main()
