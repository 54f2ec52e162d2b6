import os
import tempfile

# must be set before reservas_api.config is imported
_TMP_DIR = tempfile.mkdtemp(prefix="reservas-tests-")
os.environ["DATABASE_URL"] = "sqlite:///" + os.path.join(_TMP_DIR, "reservas.db")
os.environ["STATIC_DIR"] = os.path.join(_TMP_DIR, "public")

import pytest
from fastapi.testclient import TestClient

from reservas_api.database import Base, engine, SessionLocal
from reservas_api.main import app, limiter
from reservas_api.models.reserva import Reserva


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.create_all(bind=engine)
    yield
    app.dependency_overrides.clear()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def reset_rate_limiter():
    limiter.reset()
    yield
    limiter.reset()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def valid_payload():
    return {
        "apellidos": "García López",
        "nombres": "Ana",
        "email": "ana.garcia@example.com",
        "telefono": "5512345678",
        "tipo_evento": "Boda",
        "plan_evento": "Premium",
        "cantidad_anticipo": 1500.5,
        "servicio_adicional": "DJ <b>extra</b>",
        "horas_renta": "5",
        "compromiso_pago": True,
    }


@pytest.fixture
def stored_rows():
    def _rows():
        session = SessionLocal()
        try:
            return session.query(Reserva).order_by(Reserva.id).all()
        finally:
            session.close()
    return _rows


@pytest.fixture
def insert_rows():
    def _insert(n, **overrides):
        session = SessionLocal()
        try:
            for i in range(n):
                data = {
                    "apellidos": f"Apellido{i}",
                    "nombres": f"Nombre{i}",
                    "email": f"cliente{i}@example.com",
                    "telefono": "5500000000",
                    "tipo_evento": "XV",
                    "plan_evento": "Clasico",
                    "cantidad_anticipo": 100,
                    "servicio_adicional": "",
                    "horas_renta": "3",
                    "compromiso_pago": False,
                }
                data.update(overrides)
                session.add(Reserva(**data))
            session.commit()
            return [r.id for r in session.query(Reserva).order_by(Reserva.id).all()]
        finally:
            session.close()
    return _insert
