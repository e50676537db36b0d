from typing import Dict, Optional, Type
from models import Resource
from ticketing.api_client import ApiClient
from ticketing.auth_service import AuthService
from ticketing.base import BaseService
from ticketing.movie_service import MovieService
from ticketing.ticket_service import TicketService


class ServiceRegistry:
    _services: Dict[Resource, Type[BaseService]] = {
        "movies": MovieService,
        "tickets": TicketService,
        "auth": AuthService,
    }

    @classmethod
    def get_service(cls, resource: Resource, api: Optional[ApiClient] = None) -> BaseService:
        """Get service instance for a resource."""
        service_class = cls._services.get(resource)
        if not service_class:
            raise ValueError(f"No service registered for resource: {resource}")
        return service_class(api=api)

    @classmethod
    def register_service(cls, resource: Resource, service_class: Type[BaseService]) -> None:
        """Register a new service for a resource."""
        cls._services[resource] = service_class
