"""Set password use case."""

from uuid import UUID

from pydantic import BaseModel, Field

from sociallink.application.usecase.base import BaseUseCase
from sociallink.domain.service import UserService
from sociallink.domain.value import UserId


class SetPasswordRequest(BaseModel):
    """Set password request.

    Carries an already hashed password; hashing happens before this point.
    """

    user_id: str  # From authenticated user
    password_hash: str = Field(min_length=1)


class SetPasswordResponse(BaseModel):
    """Set password response."""

    user_id: str
    has_password: bool


class SetPasswordUseCase(BaseUseCase):
    """Use case for giving a social-only user a local password.

    Once set, the user may unlink their last social account.
    """

    def __init__(self, user_service: UserService) -> None:
        """Initialize set password use case.

        Args:
            user_service: User domain service
        """
        self.user_service = user_service

    async def execute(self, request: SetPasswordRequest) -> SetPasswordResponse:
        """Store the password hash on the user.

        Raises:
            NotFoundError: If user not found
        """
        user = await self.user_service.set_password_hash(
            UserId(UUID(request.user_id)), request.password_hash
        )
        return SetPasswordResponse(user_id=str(user.id), has_password=user.has_password)
