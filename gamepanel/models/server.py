#!/usr/bin/env python3
"""Server models. The option manager only reads these."""
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from gamepanel.core.database import Base


class Server(Base):
    """Deployed server instance built from a service option."""

    __tablename__ = "servers"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    service_id = Column(Integer, ForeignKey("services.id"), nullable=False)
    option_id = Column(
        Integer,
        ForeignKey("service_options.id", ondelete="RESTRICT"),
        nullable=False,
        index=True
    )
    created_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )

    option = relationship("ServiceOption", back_populates="servers")
    variables = relationship("ServerVariable", back_populates="server")

    def __repr__(self) -> str:
        return f"<Server(id={self.id}, name={self.name}, option_id={self.option_id})>"


class ServerVariable(Base):
    """Value a server assigns to one of its option's variables."""

    __tablename__ = "server_variables"

    id = Column(Integer, primary_key=True, autoincrement=True)
    server_id = Column(Integer, ForeignKey("servers.id", ondelete="CASCADE"), nullable=False)
    variable_id = Column(
        Integer,
        ForeignKey("service_variables.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    variable_value = Column(Text, nullable=True)

    server = relationship("Server", back_populates="variables")
    variable = relationship("Variable", back_populates="server_values")
