from abc import ABC, abstractmethod
from typing import Dict, Optional
from dataclasses import dataclass

@dataclass
class OmdbConfig:
    """Configuration class for OMDB API"""
    api_key: str
    base_url: str = "https://www.omdbapi.com/"
    plot: str = "full"
    timeout: float = 10

class OmdbResponse:
    """Response wrapper for OMDB API calls"""
    def __init__(self, data: Dict, status_code: int, success: bool, error: Optional[str] = None):
        self.data = data
        self.status_code = status_code
        self.success = success
        self.error = error

class OmdbError(Exception):
    """Raised when OMDB cannot be reached or answers with a non-2xx status"""
    def __init__(self, message: str, status_code: int = None):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)

class OmdbClientInterface(ABC):
    """Abstract interface for OMDB client"""

    @abstractmethod
    def get_by_imdb_id(self, imdb_id: str) -> OmdbResponse:
        pass
