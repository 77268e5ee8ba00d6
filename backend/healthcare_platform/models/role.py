from sqlalchemy import Column, String, Text

from healthcare_platform.core.database import Base
from healthcare_platform.models.shared import TimestampMixin, UUIDType, generate_uuid


class Role(TimestampMixin, Base):
    """RBAC role catalogue entry. Platform-wide; hard delete only."""

    __tablename__ = "roles"

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    code = Column(String(50), unique=True, index=True, nullable=False)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    scope_type = Column(String(20), nullable=False, default="organization")
    status = Column(String(20), nullable=False, default="active")
