from sqlalchemy import Column, Integer, String, Numeric, Boolean, Text
from ..database import Base

class Reserva(Base):
    __tablename__ = "reservas"

    id = Column(Integer, primary_key=True, index=True)
    apellidos = Column(String(27))
    nombres = Column(String(20))
    email = Column(String(254))
    telefono = Column(String(10))
    tipo_evento = Column(String(10))
    plan_evento = Column(String(10))
    cantidad_anticipo = Column(Numeric(12, 2, asdecimal=False))
    servicio_adicional = Column(Text)
    horas_renta = Column(String(1))
    compromiso_pago = Column(Boolean)

# column order used by insert and full-row update
RESERVA_FIELDS = (
    "apellidos",
    "nombres",
    "email",
    "telefono",
    "tipo_evento",
    "plan_evento",
    "cantidad_anticipo",
    "servicio_adicional",
    "horas_renta",
    "compromiso_pago",
)

# free-text columns that go through the HTML sanitizer before insert
SANITIZED_FIELDS = ("apellidos", "nombres", "tipo_evento", "servicio_adicional")
