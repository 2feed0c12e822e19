from __future__ import annotations

import logging
from typing import Any, Mapping

from ..client import (
    API_FORMAT,
    ListOptions,
    OnAppClient,
    encode_params,
    require_id,
    require_payload,
)
from ..models import User, UserCreateRequest, UserEditRequest
from .envelope import unwrap, unwrap_list, wrap

logger = logging.getLogger(__name__)

USERS_BASE_PATH = "users"


class UsersService:
    RESOURCE_KEY = "user"

    def __init__(self, client: OnAppClient) -> None:
        self._client = client

    async def list(self, options: ListOptions | None = None) -> list[User]:
        payload = await self._client.request(
            "GET",
            USERS_BASE_PATH + API_FORMAT,
            params=encode_params(options),
        )
        return unwrap_list(payload, self.RESOURCE_KEY, User)

    async def get(self, user_id: int) -> User:
        require_id(user_id)
        payload = await self._client.request(
            "GET", f"{USERS_BASE_PATH}/{user_id}{API_FORMAT}"
        )
        return unwrap(payload, self.RESOURCE_KEY, User)

    async def create(
        self,
        create_request: UserCreateRequest | Mapping[str, Any],
    ) -> User:
        require_payload(create_request, "create_request", allow_empty=False)
        payload = await self._client.request(
            "POST",
            USERS_BASE_PATH + API_FORMAT,
            json=wrap(self.RESOURCE_KEY, create_request),
        )
        user = unwrap(payload, self.RESOURCE_KEY, User)
        # Never log the password or e-mail.
        logger.info(
            "User created: id=%s login=%s",
            user.id,
            user.login,
            extra={"user_id": user.id},
        )
        return user

    async def delete(
        self,
        user_id: int,
        meta: Mapping[str, Any] | None = None,
    ) -> None:
        """Delete a user. Pass ``meta={"force": True}`` to also drop resources."""
        require_id(user_id)
        await self._client.request(
            "DELETE",
            f"{USERS_BASE_PATH}/{user_id}{API_FORMAT}",
            params=encode_params(meta),
        )
        logger.info("User deleted: id=%d", user_id, extra={"user_id": user_id})

    async def edit(self, user_id: int, edit_request: UserEditRequest) -> None:
        require_id(user_id)
        require_payload(edit_request, "edit_request")
        await self._client.request(
            "PUT",
            f"{USERS_BASE_PATH}/{user_id}{API_FORMAT}",
            json=wrap(self.RESOURCE_KEY, edit_request),
        )
        logger.info("User edited: id=%d", user_id, extra={"user_id": user_id})
