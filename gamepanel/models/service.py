#!/usr/bin/env python3
from sqlalchemy import Column, Integer, String, Text, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from gamepanel.core.database import Base


class Service(Base):
    """A category of game or application server offered by the panel."""

    __tablename__ = "services"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    # Default startup template, options may override it
    startup = Column(Text, nullable=True)

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
    options = relationship("ServiceOption", back_populates="service")

    def __repr__(self) -> str:
        return f"<Service(id={self.id}, name={self.name})>"
