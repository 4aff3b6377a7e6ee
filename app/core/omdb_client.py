import requests
import logging
from typing import Dict
from .interfaces import OmdbClientInterface, OmdbResponse, OmdbConfig, OmdbError

logger = logging.getLogger(__name__)

class OmdbClient(OmdbClientInterface):
    """Concrete implementation of OMDB client"""

    def __init__(self, config: OmdbConfig):
        self.config = config
        self.session = requests.Session()
        self.session.headers.update({
            "accept": "application/json"
        })

    def make_request(self, params: Dict) -> OmdbResponse:
        """Make HTTP request to OMDB API.

        OMDB reports lookup failures inside a 200 body (``Response: "False"``),
        so those come back as an unsuccessful response; anything that keeps us
        from getting a 2xx JSON body raises :class:`OmdbError`.
        """
        params = dict(params)
        params["apikey"] = self.config.api_key

        try:
            logger.info(f"Making request to: {self.config.base_url} (i={params.get('i')})")
            response = self.session.get(self.config.base_url, params=params, timeout=self.config.timeout)
        except requests.exceptions.RequestException as e:
            logger.error(f"Request exception: {str(e)}")
            raise OmdbError(f"Request failed: {str(e)}")

        if not 200 <= response.status_code < 300:
            logger.error(f"API request failed: {response.status_code} - {response.text}")
            raise OmdbError(f"OMDB responded with status {response.status_code}", response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"Invalid JSON from OMDB: {str(e)}")
            raise OmdbError("OMDB returned an invalid response", response.status_code)

        if not isinstance(data, dict):
            logger.error(f"Unexpected OMDB payload type: {type(data).__name__}")
            raise OmdbError("OMDB returned an invalid response", response.status_code)

        if data.get("Response") == "False":
            return OmdbResponse(data, response.status_code, False, data.get("Error"))
        return OmdbResponse(data, response.status_code, True)

    def get_by_imdb_id(self, imdb_id: str) -> OmdbResponse:
        """Get full movie details by IMDB id"""
        return self.make_request({"i": imdb_id, "plot": self.config.plot})


def create_omdb_client(api_key: str, base_url: str = None, timeout: float = None) -> OmdbClient:
    """Build an OMDB client from settings values"""
    config = OmdbConfig(api_key=api_key)
    if base_url:
        config.base_url = base_url
    if timeout:
        config.timeout = timeout
    return OmdbClient(config)
