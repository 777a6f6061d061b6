from typing import List, Optional

from pydantic import Field, computed_field

from app.models.user_role import ROLE_PRECEDENCE, Role
from app.schemas.base import CamelModel


class Identity(CamelModel):
    """
    The caller, as resolved from the session token.

    Passed explicitly into every record-service call. `role` is a display
    label only; authorization evaluates the full `groups` list.
    """
    subject: Optional[str] = None
    name: str = "User"
    email: str = ""
    groups: List[str] = Field(default_factory=list)
    authenticated: bool = False

    @classmethod
    def anonymous(cls) -> "Identity":
        return cls(name="Anonymous")

    @computed_field
    @property
    def role(self) -> str:
        for role in ROLE_PRECEDENCE:
            if role.value in self.groups:
                return role.value
        return Role.EMPLOYEE.value

    @computed_field
    @property
    def is_super_admin(self) -> bool:
        return Role.SUPER_ADMIN.value in self.groups

    @computed_field
    @property
    def is_hr_admin(self) -> bool:
        return Role.HR_ADMIN.value in self.groups

    @computed_field
    @property
    def is_hr_officer(self) -> bool:
        return Role.HR_OFFICER.value in self.groups

    @property
    def actor(self) -> str:
        """Value written into createdBy/updatedBy/performedBy."""
        return self.email or self.subject or "anonymous"
