"""Tree nodes and their permissions."""

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from folder_contents.models.base import Base


def _new_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Node(Base):
    """A folder or resource in the tree.

    Folders and resources share one table. ``parent_id`` is the only tree
    edge and ``path`` is the canonical path, unique across the tree. The root
    folder has no parent and is named after the root path.
    """

    __tablename__ = "node"
    __table_args__ = (
        Index("ix_node_parent_type", "parent_id", "resource_type"),
        Index("ix_node_path", "path", unique=True),
    )

    id: Mapped[str] = mapped_column(String, primary_key=True, default=_new_id)
    resource_type: Mapped[str] = mapped_column(String, nullable=False)
    name: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    path: Mapped[str] = mapped_column(String, nullable=False)
    parent_id: Mapped[Optional[str]] = mapped_column(
        String, ForeignKey("node.id", ondelete="CASCADE"), nullable=True
    )

    created_on: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    last_updated_on: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow
    )
    created_by: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    last_updated_by: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    owned_by: Mapped[Optional[str]] = mapped_column(String, nullable=True)

    # only set for versioned resource types
    version: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    publication_status: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    is_latest_version: Mapped[Optional[bool]] = mapped_column(Boolean, nullable=True)

    def __repr__(self) -> str:
        return f"Node(id={self.id!r}, type={self.resource_type!r}, path={self.path!r})"


class NodePermission(Base):
    """A read or write grant of one node to one user."""

    __tablename__ = "node_permission"
    __table_args__ = (UniqueConstraint("node_id", "user_id", "permission"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    node_id: Mapped[str] = mapped_column(
        String, ForeignKey("node.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    permission: Mapped[str] = mapped_column(String, nullable=False, default="read")
