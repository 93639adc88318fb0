import bcrypt
from src.libs.result import Error, Result, Return

from src.app.services.unit_of_work import UnitOfWork
from src.api.utils.jwt import generate_jwt
from src.domain.entities import User
from .dtos import AuthenticatedUser
from .password_policy import validate_password
from .signup_dto import SignupCommand, UserProfile


class SignupUseCase:
    """
    Signup Use Case

    Command/Response Pattern:
    - Input: SignupCommand
    - Output: Result[AuthenticatedUser]

    Business Logic:
    1. All of full_name, email, password are required
    2. Password must satisfy the password policy (6 chars to 72 bytes)
    3. Email must not be registered yet
    4. Hash password with bcrypt cost factor 12
    5. Create User and commit
    6. Issue a session JWT for the new user
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, command: SignupCommand) -> Result[AuthenticatedUser]:
        """
        Execute signup use case

        Args:
            command: SignupCommand with full_name, email, password

        Returns:
            Result[AuthenticatedUser] with profile and session token
            or Error(MISSING_FIELDS / PASSWORD_* / EMAIL_ALREADY_EXISTS)
        """
        if not command.full_name or not command.email or not command.password:
            return Return.err(Error("MISSING_FIELDS", "All fields are required"))

        # Checked before touching the store
        password_validation = validate_password(command.password)
        if password_validation.is_err():
            return Return.err(password_validation.error)

        async with self.uow:
            existing_user = await self.uow.users.get_by_email(command.email)
            if existing_user:
                return Return.err(
                    Error("EMAIL_ALREADY_EXISTS", "Email already exists")
                )

            password_hash = bcrypt.hashpw(
                command.password.encode("utf-8"), bcrypt.gensalt(12)
            )

            user = User(
                full_name=command.full_name,
                email=command.email,
                password_hash=password_hash.decode("utf-8"),
            )
            user = await self.uow.users.create(user)

            await self.uow.commit()

            return Return.ok(
                AuthenticatedUser(
                    user=UserProfile(
                        id=str(user.id),
                        full_name=user.full_name,
                        email=user.email,
                        profile_pic=user.profile_pic,
                    ),
                    access_token=generate_jwt(user.id),
                )
            )
