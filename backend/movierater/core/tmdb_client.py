import requests
import logging
from typing import Any, Dict, Optional
from .exceptions import ConfigurationError
from .interfaces import TMDBClientInterface, TMDBResponse, TMDBConfig, TMDBError

logger = logging.getLogger(__name__)

class TMDBClient(TMDBClientInterface):
    """Concrete implementation of TMDB client"""

    def __init__(self, config: TMDBConfig, session: Optional[requests.Session] = None):
        self.config = config
        self.session = session or requests.Session()
        self.session.headers.update({
            "accept": "application/json"
        })

    def make_request(self, endpoint: str, params: Dict = None, method: str = "GET",
                     json: Optional[Dict[str, Any]] = None) -> TMDBResponse:
        """Make HTTP request to TMDB API"""
        if not self.config.api_key:
            logger.error("TMDB API key is missing")
            raise ConfigurationError()

        url = f"{self.config.base_url}/{endpoint.lstrip('/')}"
        params = dict(params or {})

        # Add API key to params
        params['api_key'] = self.config.api_key

        if self.config.language:
            params['language'] = self.config.language

        try:
            logger.info(f"Making {method} request to: {url}")
            response = self.session.request(
                method, url, params=params, json=json, timeout=self.config.timeout
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"Request exception: {str(e)}")
            raise TMDBError(f"Request failed: {str(e)}")

        if response.ok:
            try:
                data = response.json()
            except ValueError:
                data = {}
            return TMDBResponse(data, response.status_code, True)

        logger.error(f"API request failed: {response.status_code} - {response.text}")
        return TMDBResponse({}, response.status_code, False)
