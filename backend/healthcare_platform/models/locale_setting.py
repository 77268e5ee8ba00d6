from sqlalchemy import Column, ForeignKey, Index, String, func, literal_column

from healthcare_platform.core.database import Base
from healthcare_platform.core.soft_delete import SoftDeleteMixin
from healthcare_platform.models.shared import TimestampMixin, UUIDType, generate_uuid


class LocaleSetting(TimestampMixin, SoftDeleteMixin, Base):
    """Display locale for an organization, optionally narrowed to one department.

    At most one active row exists per (organization_id, department_id).
    """

    __tablename__ = "locale_settings"

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    organization_id = Column(
        UUIDType,
        ForeignKey("organizations.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    department_id = Column(
        UUIDType,
        ForeignKey("departments.id", ondelete="RESTRICT"),
        nullable=True,
        index=True,
    )
    language = Column(String(20), nullable=False)
    timezone = Column(String(50), nullable=False, default="UTC")
    date_format = Column(String(30), nullable=True)
    time_format = Column(String(10), nullable=True)
    number_format = Column(String(30), nullable=True)


# One active row per scope; NULL departments collapse to '' so the org-wide row is unique too
Index(
    "uq_locale_settings_active_scope",
    LocaleSetting.organization_id,
    func.coalesce(LocaleSetting.department_id, literal_column("''")),
    unique=True,
    sqlite_where=LocaleSetting.deleted_at.is_(None),
    postgresql_where=LocaleSetting.deleted_at.is_(None),
)
