"""
FastAPI dependency for StateRepository injection.

Tests swap the backend by overriding this one dependency:

    app.dependency_overrides[get_state_repository] = lambda: InMemoryStateRepository()
"""

from vpcprovider.dao.base import StateRepository
from vpcprovider.dao.dynamodb import DynamoDBStateRepository

_repository = DynamoDBStateRepository()


def get_state_repository() -> StateRepository:
    return _repository
