from typing import Any, List

from fastapi import APIRouter, Body, Depends
from sqlalchemy.orm import Session

from ..config import settings
from ..database import get_db
from ..schemas.reserva import MensajeResponse, ReservaResponse
from ..services.reserva_service import (
    create_reserva,
    delete_reserva,
    get_reserva,
    list_reservas,
    update_reserva,
)

router = APIRouter(tags=["reservas"])


@router.get("/reservas", response_model=List[ReservaResponse])
def get_reservas(db: Session = Depends(get_db)):
    return list_reservas(db, settings.LIST_LIMIT)


@router.get("/reserva/{reserva_id}", response_model=ReservaResponse)
def get_reserva_by_id(reserva_id: str, db: Session = Depends(get_db)):
    return get_reserva(db, reserva_id)


@router.post("/guardar-reserva", response_model=MensajeResponse)
def post_reserva(payload: Any = Body(None), db: Session = Depends(get_db)):
    """Validate, sanitize and store a new reservation.

    Every failing field is reported at once with a 400; nothing is written in
    that case. The new id is not returned.
    """
    create_reserva(db, payload)
    return {"mensaje": "Reserva guardada con éxito"}


@router.put("/actualizar-reserva/{reserva_id}", response_model=MensajeResponse)
def put_reserva(reserva_id: str, payload: Any = Body(None), db: Session = Depends(get_db)):
    """Full-row replace. Field rules only apply when ``VALIDATE_UPDATES`` is on."""
    update_reserva(db, reserva_id, payload, validate=settings.VALIDATE_UPDATES)
    return {"mensaje": "Reserva actualizada con éxito"}


@router.delete("/eliminar-reserva/{reserva_id}", response_model=MensajeResponse)
def remove_reserva(reserva_id: str, db: Session = Depends(get_db)):
    delete_reserva(db, reserva_id)
    return {"mensaje": "Reserva eliminada con éxito"}
