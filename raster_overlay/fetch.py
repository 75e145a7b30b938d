# fetch.py — PostgREST (Supabase) client for raster grids and vector tables
import logging
from typing import List, Optional
import requests

from .config import SUPABASE_URL, SUPABASE_API_KEY, FETCH_TIMEOUT, VECTOR_LIMIT
from .errors import FetchError
from .models import Grid

logger = logging.getLogger(__name__)


def _headers(api_key: str) -> dict:
    return {"apikey": api_key, "Authorization": f"Bearer {api_key}"}


def _check(resp: requests.Response, what: str) -> None:
    if not resp.ok:
        logger.warning(f"HTTP {resp.status_code} fetching {what}")
        raise FetchError(f"HTTP {resp.status_code}")


def fetch_raster_record(
    table_name: str,
    base_url: str = SUPABASE_URL,
    api_key: str = SUPABASE_API_KEY,
    timeout: float = FETCH_TIMEOUT,
    session: Optional[requests.Session] = None,
) -> dict:
    """Call rpc/get_raster_data and return the first ``{width, height, data}`` record."""
    http = session or requests
    try:
        resp = http.post(
            f"{base_url}/rest/v1/rpc/get_raster_data",
            params={"apikey": api_key},
            headers={**_headers(api_key), "Content-Type": "application/json"},
            json={"table_name": table_name},
            timeout=timeout,
        )
    except requests.RequestException as e:
        logger.warning(f"Raster fetch for {table_name} failed: {e}")
        raise FetchError(str(e)) from e

    _check(resp, f"raster {table_name}")
    data = resp.json()
    if not data or not data[0]:
        raise FetchError("Sin datos")
    return data[0]


def fetch_raster(table_name: str, **kwargs) -> Grid:
    record = fetch_raster_record(table_name, **kwargs)
    try:
        return Grid.from_record(record)
    except (KeyError, TypeError, ValueError) as e:
        raise FetchError(f"malformed raster record for {table_name}: {e}") from e


def fetch_vector_rows(
    table_name: str,
    base_url: str = SUPABASE_URL,
    api_key: str = SUPABASE_API_KEY,
    limit: int = VECTOR_LIMIT,
    timeout: float = FETCH_TIMEOUT,
    session: Optional[requests.Session] = None,
) -> List[dict]:
    http = session or requests
    try:
        resp = http.get(
            f"{base_url}/rest/v1/{table_name}",
            params={"select": "*", "limit": str(limit)},
            headers=_headers(api_key),
            timeout=timeout,
        )
    except requests.RequestException as e:
        logger.warning(f"Vector fetch for {table_name} failed: {e}")
        raise FetchError(str(e)) from e

    _check(resp, f"vector table {table_name}")
    rows = resp.json()
    if not rows:
        raise FetchError("Sin datos")
    return rows
