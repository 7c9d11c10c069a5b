#!/usr/bin/env python3
from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from gamepanel.core.database import Base


class Variable(Base):
    """Environment variable exposed by a service option to its servers."""

    __tablename__ = "service_variables"

    id = Column(Integer, primary_key=True, autoincrement=True)
    option_id = Column(
        Integer,
        ForeignKey("service_options.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    env_variable = Column(String(255), nullable=False)
    default_value = Column(Text, nullable=True)
    user_viewable = Column(Boolean, nullable=False, default=False)
    user_editable = Column(Boolean, nullable=False, default=False)
    rules = Column(Text, nullable=True)

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
    option = relationship("ServiceOption", back_populates="variables")
    server_values = relationship("ServerVariable", back_populates="variable", passive_deletes=True)

    __table_args__ = (
        UniqueConstraint("option_id", "env_variable", name="uq_variable_env_per_option"),
    )

    def __repr__(self) -> str:
        return f"<Variable(id={self.id}, env_variable={self.env_variable}, option_id={self.option_id})>"
