"""Catalog source boundary: fetch the raw CSV feed and parse it into rows.

The engine itself never performs I/O; this module is the thin upstream
collaborator that produces the loosely typed rows the validator expects.
Parsing mirrors a browser CSV parser with dynamic typing: header keys are
trimmed, blank lines skipped, the delimiter guessed, and numeric or
boolean cells converted.

Usage::

    import asyncio
    from quakecompass.sources import load_records

    rows = asyncio.run(load_records("https://example.org/earthquakes.csv"))
"""

import asyncio
import csv
import io
import logging
import re

import httpx

from quakecompass.errors import SourceError

logger = logging.getLogger(__name__)

USER_AGENT = "QuakeCompass/0.1"
DELIMITERS = (",", "\t", "|", ";")
RETRY_STATUS = frozenset({429, 500, 502, 503, 504})

_INT_RE = re.compile(r"^[+-]?\d+$")
_FLOAT_RE = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")

# Served when the live feed is unavailable.
FALLBACK_CSV = """id,time,latitude,longitude,depth,mag,location,country,type,status,tsunami,sig,net
us70006vkq,1578377119759,2.3481,96.3575,17,6.3,14 km S of Sinabang,Indonesia,earthquake,reviewed,0,619,us
pr2020007007,1578385467370,17.9578,-66.8113,6,6.4,4 km SSE of Indios,Puerto Rico,earthquake,reviewed,1,1820,pr
us70006vvr,1578424295665,-5.2046,151.2659,117,6,130 km ENE of Kimbe,Papua New Guinea,earthquake,reviewed,0,554,us
us70006wuf,1578559088278,62.358,171.0611,10,6.4,Chukotskiy Avtonomnyy Okrug,Russia,earthquake,reviewed,0,630,us
us60007a3h,1579365494301,-2.8405,139.3363,44,6,146 km W of Abepura,Indonesia,earthquake,reviewed,0,555,us
us60007anp,1579440476630,39.8353,77.1084,5.55,6,104 km ENE of Kashgar,China,earthquake,reviewed,0,1006,us
us60007arp,1579453100002,-0.1042,123.8025,121.72,6.1,108 km SE of Gorontalo,Indonesia,earthquake,reviewed,0,574,us
"""


def parse_csv(text: str) -> list[dict]:
    """Parse CSV text with a header row into a list of typed row dicts.

    Short rows get None for their missing columns; surplus cells are
    discarded.
    """
    lines = [line for line in text.splitlines() if line.strip()]
    if not lines:
        return []

    reader = csv.DictReader(io.StringIO("\n".join(lines)), delimiter=guess_delimiter(lines[0]))
    reader.fieldnames = [name.strip() for name in reader.fieldnames]

    rows = []
    for raw in reader:
        raw.pop(None, None)
        rows.append({key: coerce_cell(value) for key, value in raw.items()})
    return rows


def guess_delimiter(header: str) -> str:
    """Pick the candidate delimiter occurring most often in the header line."""
    counts = {d: header.count(d) for d in DELIMITERS}
    best = max(DELIMITERS, key=lambda d: counts[d])
    return best if counts[best] else ","


def coerce_cell(value):
    """Convert a CSV cell to int, float, bool or None; other text is left as is."""
    if value is None:
        return None
    text = value.strip()
    if not text:
        return None
    if text.lower() in ("true", "false"):
        return text.lower() == "true"
    if _INT_RE.match(text):
        try:
            return int(text)
        except ValueError:
            return value
    if _FLOAT_RE.match(text):
        return float(text)
    return value


def fallback_records() -> list[dict]:
    """Rows of the built-in fallback catalog."""
    return parse_csv(FALLBACK_CSV)


async def fetch_catalog(
    url: str,
    *,
    client: httpx.AsyncClient | None = None,
    timeout: float = 30.0,
    max_retries: int = 3,
    backoff_base: float = 1.0,
    backoff_max: float = 30.0,
) -> str:
    """Download the raw catalog text.

    Retries with exponential backoff on 429/5xx responses and on
    transport errors.

    Args:
        url: Catalog URL.
        client: Optional shared ``httpx.AsyncClient``; one is created
            (and closed) per call if omitted.
        timeout: Request timeout in seconds for an owned client.
        max_retries: Retries after the first attempt.
        backoff_base: Delay before the first retry; doubles each retry.
        backoff_max: Upper limit on any single delay.

    Raises:
        SourceError: On a non-retryable status, or once retries run out.
    """
    owns_client = client is None
    if owns_client:
        client = httpx.AsyncClient(
            timeout=timeout,
            headers={"User-Agent": USER_AGENT},
            follow_redirects=True,
        )
    try:
        for attempt in range(max_retries + 1):
            delay = min(backoff_base * (2 ** attempt), backoff_max)
            try:
                resp = await client.get(url)
            except httpx.RequestError as e:
                if attempt < max_retries:
                    logger.warning(f"Request error fetching {url}, retrying in {delay}s: {e}")
                    await asyncio.sleep(delay)
                    continue
                raise SourceError(f"Request failed after {max_retries} retries: {url}: {e}") from e

            if resp.status_code in RETRY_STATUS and attempt < max_retries:
                logger.warning(f"HTTP {resp.status_code} fetching {url}, retrying in {delay}s")
                await asyncio.sleep(delay)
                continue
            if resp.is_error:
                raise SourceError(f"HTTP {resp.status_code} fetching {url}")
            return resp.text
    finally:
        if owns_client:
            await client.aclose()
    raise SourceError(f"No response fetching {url}")


async def load_records(url: str, **fetch_kwargs) -> list[dict]:
    """Fetch and parse the catalog, falling back to ``FALLBACK_CSV`` on failure.

    Keyword arguments are passed to ``fetch_catalog``.
    """
    try:
        text = await fetch_catalog(url, **fetch_kwargs)
    except SourceError as e:
        logger.warning(f"Using fallback catalog: {e}")
        return fallback_records()

    rows = parse_csv(text)
    if not rows:
        logger.warning(f"Catalog at {url} is empty, using fallback catalog")
        return fallback_records()
    logger.info(f"Loaded {len(rows)} rows from {url}")
    return rows
