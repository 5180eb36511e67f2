"""
User Service
Account lookup and first-sign-in provisioning
"""

from typing import Optional

from vidshare.app.models import User
from vidshare.domain.interfaces import IUserRepository
from vidshare.services.base_service import BaseService


class UserService(BaseService):
    def __init__(self, user_repo: IUserRepository, config=None):
        super().__init__(config=config)
        self.user_repo = user_repo

    def get_service_name(self) -> str:
        return "user"

    async def get_or_create(
        self, email: str, username: str, avatar: Optional[str] = None
    ) -> User:
        """
        Return the account for a verified email, creating it on first sign-in

        Called by the sign-in route once the identity verifier has accepted
        the external credential.
        """
        self.validate_required(email, "email")

        user = await self.user_repo.get_by_email(email)
        if user is not None:
            return user

        user = await self.user_repo.create(
            email=email, username=username or email.split("@")[0], avatar=avatar
        )
        self.log_info(f"Registered new user {user.id}")
        return user
