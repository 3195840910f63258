# quickshow/utils/catalog.py
import logging
import re
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

import requests
from flask import current_app
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from quickshow.errors import UpstreamNotFound, UpstreamUnavailable

log = logging.getLogger(__name__)

RETRY_STATUSES = (429, 500, 502, 503, 504)


@dataclass(frozen=True)
class CatalogConfig:
    trakt_client_id: str
    omdb_key: str
    trakt_base_url: str = "https://api.trakt.tv"
    omdb_base_url: str = "https://www.omdbapi.com/"
    timeout: float = 6
    retries: int = 3
    backoff: float = 0.5
    max_workers: int = 8

    @classmethod
    def from_app_config(cls, config):
        return cls(
            trakt_client_id=config.get("TRAKT_CLIENT_ID", ""),
            omdb_key=config.get("OMDB_KEY", ""),
            trakt_base_url=config.get("TRAKT_BASE_URL", cls.trakt_base_url),
            omdb_base_url=config.get("OMDB_BASE_URL", cls.omdb_base_url),
            timeout=config.get("UPSTREAM_TIMEOUT", cls.timeout),
            retries=config.get("UPSTREAM_RETRIES", cls.retries),
            backoff=config.get("UPSTREAM_BACKOFF", cls.backoff),
            max_workers=config.get("CATALOG_MAX_WORKERS", cls.max_workers),
        )


def _split_list(value):
    if not value or value == "N/A":
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


def _to_float(value):
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def _to_minutes(value):
    # OMDb sends "148 min"
    match = re.match(r"\s*(\d+)", value or "")
    return int(match.group(1)) if match else 0


def normalize_omdb(data):
    """Map an OMDb detail payload onto the movie record shape."""
    return {
        "id": data.get("imdbID"),
        "title": data.get("Title"),
        "overview": data.get("Plot") or "",
        "poster_path": data.get("Poster") or "",
        "backdrop_path": "",  # OMDb has no backdrops
        "release_date": data.get("Released") or "",
        "original_language": data.get("Language") or "",
        "tagline": "",
        "genres": _split_list(data.get("Genre")),
        "casts": _split_list(data.get("Actors")),
        "vote_average": _to_float(data.get("imdbRating")),
        "runtime": _to_minutes(data.get("Runtime")),
    }


class CatalogGateway:
    """Trakt for discovery, OMDb for details.

    Every call goes through one ``requests.Session`` with bounded retries
    (exponential backoff on 429/5xx and connection errors) and a per-call
    timeout. The trending fan-out runs on a bounded thread pool.
    """

    def __init__(self, config, session=None):
        self.config = config
        self.http = session or self._build_session(config)

    @staticmethod
    def _build_session(config):
        retry = Retry(
            total=config.retries,
            connect=config.retries,
            read=config.retries,
            status=config.retries,
            backoff_factor=config.backoff,
            status_forcelist=RETRY_STATUSES,
            allowed_methods=frozenset(["GET"]),
            raise_on_status=False,
        )
        adapter = HTTPAdapter(max_retries=retry, pool_maxsize=max(config.max_workers, 10))
        http = requests.Session()
        http.mount("https://", adapter)
        http.mount("http://", adapter)
        return http

    def _get_json(self, url, params=None, headers=None):
        try:
            resp = self.http.get(url, params=params, headers=headers, timeout=self.config.timeout)
            resp.raise_for_status()
            return resp.json()
        except (requests.exceptions.RequestException, ValueError) as e:
            log.error("Upstream request failed url=%s -> %s", url, e)
            raise UpstreamUnavailable("Failed to fetch movies from Trakt/OMDb") from e

    def fetch_movie(self, imdb_id):
        data = self._get_json(self.config.omdb_base_url, params={"i": imdb_id, "apikey": self.config.omdb_key})
        if not isinstance(data, dict):
            log.error("Unexpected OMDb payload for %s: %r", imdb_id, data)
            raise UpstreamUnavailable("Failed to fetch movies from Trakt/OMDb")
        if data.get("Response") == "False":
            raise UpstreamNotFound(f"Movie not found: {data.get('Error', imdb_id)}")
        return normalize_omdb(data)

    def _resolve(self, imdb_id):
        """Return ``(movie, error)``; not-found items come back as ``(None, None)``."""
        try:
            return self.fetch_movie(imdb_id), None
        except UpstreamNotFound as e:
            log.warning("OMDb error for %s: %s", imdb_id, e.message)
            return None, None
        except UpstreamUnavailable as e:
            log.warning("OMDb unavailable for %s", imdb_id)
            return None, e

    def fetch_trending(self):
        url = f"{self.config.trakt_base_url.rstrip('/')}/movies/trending"
        headers = {
            "Content-Type": "application/json",
            "trakt-api-version": "2",
            "trakt-api-key": self.config.trakt_client_id,
        }
        items = self._get_json(url, headers=headers) or []
        if not isinstance(items, list):
            raise UpstreamUnavailable("Failed to fetch movies from Trakt/OMDb")

        imdb_ids = []
        for item in items:
            if not isinstance(item, dict):
                continue
            imdb_id = ((item.get("movie") or {}).get("ids") or {}).get("imdb")
            if imdb_id and imdb_id not in imdb_ids:
                imdb_ids.append(imdb_id)
        if not imdb_ids:
            return []

        with ThreadPoolExecutor(max_workers=min(self.config.max_workers, len(imdb_ids))) as ex:
            results = list(ex.map(self._resolve, imdb_ids))

        movies = [movie for movie, _ in results if movie]
        failures = [error for _, error in results if error]
        # Nothing resolved and OMDb failed: an outage, not an empty catalog
        if failures and not movies:
            raise UpstreamUnavailable("Failed to fetch movies from Trakt/OMDb") from failures[0]
        return movies


def get_catalog():
    return current_app.extensions["catalog"]
