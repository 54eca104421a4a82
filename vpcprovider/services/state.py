"""
Helpers converting between typed resource models and state records.

Models are serialized to plain attribute maps only here, at the boundary
with the state store.
"""

from datetime import datetime, timezone
from typing import Optional, Type, TypeVar

from pydantic import BaseModel

from vpcprovider.dao.base import StateRepository, resource_key

ModelT = TypeVar("ModelT", bound=BaseModel)


def save_state(repo: StateRepository, resource_type: str, resource_id: str, model: BaseModel) -> None:
    repo.save(
        {
            "resource_key": resource_key(resource_type, resource_id),
            "resource_type": resource_type,
            "resource_id": resource_id,
            "attributes": model.model_dump(mode="json"),
            "updated_at": datetime.now(timezone.utc).isoformat(),
        }
    )


def load_state(
    repo: StateRepository, resource_type: str, resource_id: str, model_cls: Type[ModelT]
) -> Optional[ModelT]:
    record = repo.get(resource_key(resource_type, resource_id))
    if record is None:
        return None
    return model_cls.model_validate(record["attributes"])


def list_states(repo: StateRepository, resource_type: str, model_cls: Type[ModelT]) -> list[ModelT]:
    return [model_cls.model_validate(r["attributes"]) for r in repo.list_all(resource_type)]


def drop_state(repo: StateRepository, resource_type: str, resource_id: str) -> bool:
    return repo.delete(resource_key(resource_type, resource_id))
