"""GroupRequest ORM model, a user's application to join a group."""
import enum
from sqlalchemy import Column, Integer, DateTime, ForeignKey, UniqueConstraint, Enum as SAEnum
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from roleplay.database import Base


class GroupRequestStatus(str, enum.Enum):
    pending = "PENDING"
    accepted = "ACCEPTED"


class GroupRequest(Base):
    __tablename__ = "group_requests"
    __table_args__ = (UniqueConstraint("group_id", "user_id", name="uq_group_requests_group_user"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    # The database drops requests along with their group; the application never does.
    group_id = Column(Integer, ForeignKey("groups.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    status = Column(
        SAEnum(
            GroupRequestStatus,
            values_callable=lambda e: [m.value for m in e],
            native_enum=False,
            length=20,
        ),
        nullable=False,
        default=GroupRequestStatus.pending,
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    group = relationship("Group")
    user = relationship("User")
