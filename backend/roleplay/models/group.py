"""Group and GroupPlayer ORM models."""
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from roleplay.database import Base


class Group(Base):
    __tablename__ = "groups"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(150), nullable=False)
    description = Column(Text, nullable=False)
    chronic = Column(String(255), nullable=False)
    location = Column(String(255), nullable=False)
    schedule = Column(String(255), nullable=False)
    master = Column(Integer, ForeignKey("users.id"), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    master_user = relationship("User", foreign_keys=[master])
    memberships = relationship("GroupPlayer", back_populates="group", cascade="all, delete-orphan")
    # Read side of the roster; writes go through GroupPlayer rows.
    players = relationship("User", secondary="group_players", viewonly=True, order_by="User.id")


class GroupPlayer(Base):
    __tablename__ = "group_players"

    group_id = Column(Integer, ForeignKey("groups.id", ondelete="CASCADE"), primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    joined_at = Column(DateTime(timezone=True), server_default=func.now())

    group = relationship("Group", back_populates="memberships")
