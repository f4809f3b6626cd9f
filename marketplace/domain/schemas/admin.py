"""Pydantic schemas for admin roles and the moderation dashboard."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr

from marketplace.domain.roles import AdminRoleName
from marketplace.domain.schemas.auth import UserSummary


class InitializeSuperAdminRequest(BaseModel):
    email: EmailStr


class GrantRoleRequest(BaseModel):
    email: EmailStr
    role: AdminRoleName


class RevokeRoleRequest(BaseModel):
    email: EmailStr


class AdminRoleRead(BaseModel):
    id: int
    user_id: int
    role: AdminRoleName
    granted_by_id: int
    granted_at: datetime
    user: Optional[UserSummary] = None
    granted_by: Optional[UserSummary] = None


class AdminStatus(BaseModel):
    is_admin: bool
    role: Optional[AdminRoleName] = None


class AdminStats(BaseModel):
    total_listings: int
    pending_listings: int
    approved_listings: int
    total_users: int
    total_admins: int


class OperationResult(BaseModel):
    success: bool = True
    message: str
