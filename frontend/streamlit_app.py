"""Minimal Streamlit client for the Health Metrics Tracker API."""

from __future__ import annotations

import os
import time
from typing import Any
from urllib.parse import quote

import httpx
import streamlit as st

DEFAULT_API_BASE = "http://localhost:8000"
CALLER_ENV_VAR = "HEALTH_METRICS_CALLER"


def get_api_base() -> str:
    """Prefer Streamlit secrets/env var overrides for API base URL."""
    # Streamlit raises when no secrets file exists, so guard the lookup.
    secret_value: str | None = None
    try:
        secret_value = st.secrets["api_base"]
    except Exception:  # noqa: BLE001 - secrets module raises custom errors
        secret_value = None

    env_value = os.environ.get("API_BASE_URL")
    return secret_value or env_value or DEFAULT_API_BASE


@st.cache_data(ttl=600)
def load_metric_types() -> list[dict[str, Any]]:
    """Load and cache the accepted metric types for selector widgets."""
    return _request_api("GET", "/metrics/types")


def record_metric(caller: str, payload: dict[str, Any]) -> dict[str, Any]:
    """Record a reading on behalf of ``caller``."""
    return _request_api("POST", "/metrics/", json=payload, headers={"X-Caller-Id": caller})


def fetch_latest(owner: str, metric_type: int) -> dict[str, Any]:
    """Fetch the latest reading for an owner and metric type."""
    return _request_api("GET", f"/metrics/{quote(owner, safe='')}/{metric_type}")


def _request_api(method: str, path: str, **kwargs: Any) -> Any:
    base_url = get_api_base().rstrip("/")
    url = f"{base_url}{path}"
    with httpx.Client(timeout=30, follow_redirects=True) as client:
        response = client.request(method, url, **kwargs)
        response.raise_for_status()
        return response.json()


def _error_message(exc: httpx.HTTPError) -> str:
    if isinstance(exc, httpx.HTTPStatusError):
        try:
            body = exc.response.json()
        except ValueError:
            # Proxies in front of the API may answer with an HTML page.
            return f"Request failed ({exc.response.status_code}): {exc.response.text[:200]}"
        if isinstance(body, dict) and "code" in body:
            return f"Rejected (error {body['code']}): {body['detail']}"
    return f"Request failed: {exc}"


def main() -> None:
    st.set_page_config(page_title="Health Metrics Tracker", layout="centered")
    st.title("Health Metrics Tracker")
    st.caption("Streamlit client for the latest-reading store")

    with st.sidebar:
        st.header("Identity")
        caller = st.text_input("Caller ID", value=os.environ.get(CALLER_ENV_VAR, ""))

    try:
        metric_types = load_metric_types()
    except httpx.HTTPError as exc:
        st.error(f"Could not load metric types: {exc}")
        return
    labels = {f"{item['name'].replace('_', ' ').title()} ({item['code']})": item["code"] for item in metric_types}

    st.subheader("Record a reading")
    with st.form("record"):
        label = st.selectbox("Metric type", list(labels))
        value = st.number_input("Value", min_value=0, value=0, step=1)
        notes = st.text_input("Notes")
        submitted = st.form_submit_button("Record", use_container_width=True)

    if submitted:
        if not caller:
            st.warning("Set a caller ID in the sidebar first.")
        else:
            payload = {
                "metric_type": labels[label],
                "value": int(value),
                "timestamp": int(time.time()),
                "notes": notes or None,
            }
            try:
                record_metric(caller, payload)
            except httpx.HTTPError as exc:
                st.error(_error_message(exc))
            else:
                st.success("Reading recorded.")

    st.divider()
    st.subheader("Latest reading")
    owner = st.text_input("Owner", value=caller)
    lookup_label = st.selectbox("Metric type to look up", list(labels))
    if st.button("Look up", use_container_width=True) and owner:
        try:
            data = fetch_latest(owner, labels[lookup_label])
        except httpx.HTTPError as exc:
            st.error(_error_message(exc))
            return

        measurement = data.get("measurement")
        if measurement is None:
            st.info("No reading recorded yet.")
            return
        st.metric(lookup_label, measurement["value"])
        if measurement.get("notes"):
            st.write(measurement["notes"])


if __name__ == "__main__":
    main()
