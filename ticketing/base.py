import abc
import logging
from typing import Any, List, Optional, get_args

from models import Resource
from ticketing.api_client import ApiClient
from ticketing.config import settings

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


class BaseService(abc.ABC):
    resource: Resource

    def __init__(self, api: Optional[ApiClient] = None):
        if not hasattr(self, "resource") or self.resource not in get_args(Resource):
            raise ValueError(f"Invalid resource: {getattr(self, 'resource', None)}")

        self.api = api or ApiClient()

    @property
    def session(self):
        return self.api.session

    def map_list(self, data: Any) -> List[Any]:
        """Map a list response; anything but a list maps to []."""
        if not isinstance(data, list):
            if data is not None:
                logger.warning("Expected a list of %s, got %s", self.resource, type(data).__name__)
            return []
        return [self.map_record(raw) for raw in data]

    @abc.abstractmethod
    def map_record(self, raw: Any) -> Any:
        """Turn one raw backend record into its canonical entity"""
