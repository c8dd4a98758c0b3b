"""SQLAlchemy ORM models matching the hosted radicados schema"""

import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, Boolean, DateTime, Date, Integer, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class Radicado(Base):
    """Incoming document awaiting a tracked response"""

    __tablename__ = "radicados"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    numero_radicado = Column(Text, nullable=False, index=True)
    funcionario = Column(Text, nullable=False, default="")
    fecha_radicado = Column(Date, nullable=True)
    fecha_asignacion = Column(Date, nullable=True)
    fecha_limite_respuesta = Column(Date, nullable=True)
    tema = Column(Text, nullable=False, default="")
    canal = Column(Text, nullable=False, default="")
    remitente = Column(Text, nullable=False, default="")
    solicitud = Column(Text, nullable=False, default="")
    alerta = Column(Boolean, nullable=False, default=False)
    fecha_radicado_respuesta = Column(Date, nullable=True, index=True)
    numero_radicado_respuesta = Column(Text, nullable=True)
    dias_respuesta = Column(Integer, nullable=True)
    respuesta_parcial = Column(Text, nullable=True)
    requirio_visita = Column(Boolean, nullable=True)
    conclusion_respuesta = Column(Text, nullable=True)
    numero_radicado_prorroga = Column(Text, nullable=True)
    fecha_solicitud_prorroga = Column(Date, nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=func.now(),
    )


class FestivoColombia(Base):
    """National holiday reference table, one row per date"""

    __tablename__ = "festivos_colombia"

    fecha = Column(Date, primary_key=True)
    nombre = Column(Text, nullable=False)
