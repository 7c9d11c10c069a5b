#!/usr/bin/env python3
from sqlalchemy import (
    Column, Integer, String, Text, Boolean, DateTime, ForeignKey, Index, CheckConstraint
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from gamepanel.core.database import Base


class ServiceOption(Base):
    """Configurable variant of a Service (e.g. 'Vanilla' or 'Spigot' for Minecraft)."""

    __tablename__ = "service_options"

    id = Column(Integer, primary_key=True, autoincrement=True)
    service_id = Column(
        Integer,
        ForeignKey("services.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    tag = Column(String(60), nullable=False, unique=True)
    docker_image = Column(String(255), nullable=True)
    startup = Column(Text, nullable=True)

    # Configuration inheritance - when set, config_* fall back to the parent
    config_from = Column(
        Integer,
        ForeignKey("service_options.id", ondelete="SET NULL"),
        nullable=True
    )
    config_startup = Column(Text, nullable=True)  # JSON
    config_stop = Column(String(255), nullable=True)
    config_logs = Column(Text, nullable=True)  # JSON
    config_files = Column(Text, nullable=True)  # JSON

    # Install script - copy_script_from may only point one level up
    script_install = Column(Text, nullable=True)
    script_is_privileged = Column(Boolean, nullable=False, default=True)
    script_entry = Column(String(255), nullable=False, default="ash")
    script_container = Column(String(255), nullable=False, default="alpine:3.4")
    copy_script_from = Column(
        Integer,
        ForeignKey("service_options.id", ondelete="SET NULL"),
        nullable=True
    )

    created_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False
    )

    # Relationships
    service = relationship("Service", back_populates="options")
    variables = relationship("Variable", back_populates="option", passive_deletes=True)
    servers = relationship("Server", back_populates="option", passive_deletes=True)
    config_parent = relationship("ServiceOption", remote_side=[id], foreign_keys=[config_from])
    script_parent = relationship("ServiceOption", remote_side=[id], foreign_keys=[copy_script_from])

    __table_args__ = (
        CheckConstraint(
            "config_from IS NULL OR config_from != id",
            name="check_no_self_config_from"
        ),
        CheckConstraint(
            "copy_script_from IS NULL OR copy_script_from != id",
            name="check_no_self_copy_script_from"
        ),
        Index("idx_options_service", "service_id"),
        Index("idx_options_config_from", "config_from"),
        Index("idx_options_copy_script_from", "copy_script_from"),
    )

    def __repr__(self) -> str:
        return f"<ServiceOption(id={self.id}, tag={self.tag}, service_id={self.service_id})>"
