# -*- coding: utf-8 -*-
"""Base provisioner class for all entity provisioners."""

# Standard
from abc import ABC, abstractmethod
import logging
from typing import Any, Dict, List, Mapping, Optional, Type, TypeVar, Union

# Third-Party
from pydantic import BaseModel

# Local
from ..api_client import RemoteGateway
from ..facts import FactSynthesizer
from ..fixtures import ActiveSubject

logger = logging.getLogger(__name__)

OptionsT = TypeVar("OptionsT", bound=BaseModel)


def coerce_options(options: Union[OptionsT, Mapping[str, Any], None], model: Type[OptionsT]) -> OptionsT:
    """Accept a model instance, a plain mapping (wire or Python names) or None."""
    if options is None:
        return model()
    if isinstance(options, model):
        return options
    return model.model_validate(dict(options))


class BaseProvisioner(ABC):
    """Base class for entity provisioners.

    Each provisioner creates one entity kind through the remote gateway,
    resolving the user it belongs to from the active test subject when the
    caller leaves it out.
    """

    def __init__(self, gateway: RemoteGateway, facts: FactSynthesizer, subject: ActiveSubject):
        self.gateway = gateway
        self.facts = facts
        self.subject = subject

        # Results tracking
        self.created_count = 0
        self.created_ids: List[str] = []

    @abstractmethod
    def get_name(self) -> str:
        """Get the name of the entity kind (e.g., 'users', 'contact_methods')."""

    async def resolve_user_id(self, user_id: Optional[str]) -> str:
        """Return ``user_id``, or the active test subject's id when it is missing."""
        if user_id:
            return user_id
        profile = await self.subject.get()
        return profile.id

    def _track(self, entity_id: str) -> None:
        self.created_count += 1
        self.created_ids.append(entity_id)
        logger.debug(f"Created {self.get_name()} {entity_id}")

    def get_stats(self) -> Dict[str, Any]:
        return {"created": self.created_count, "ids": list(self.created_ids)}
