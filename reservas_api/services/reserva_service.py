import logging
import re
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..models.reserva import Reserva, RESERVA_FIELDS, SANITIZED_FIELDS
from ..schemas.reserva import parse_reserva
from ..utils.errors import ReservaNotFound, StorageError
from ..utils.sanitizer import sanitize_input

logger = logging.getLogger(__name__)

_ID_RE = re.compile(r"^-?[0-9]+$")
# sqlite cannot bind integers outside signed 64-bit
_ID_MIN, _ID_MAX = -2**63, 2**63 - 1


def parse_reserva_id(raw_id) -> Optional[int]:
    """Path ids are opaque strings; anything that is not a base-10 integer matches no row."""
    if not isinstance(raw_id, int):
        raw_id = str(raw_id).strip()
        if not _ID_RE.match(raw_id):
            return None
        raw_id = int(raw_id)
    if not _ID_MIN <= raw_id <= _ID_MAX:
        return None
    return raw_id


def build_sanitized_row(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Validate a create payload and return the column values ready to insert."""
    data = parse_reserva(payload).model_dump()
    row = {field: data.get(field) for field in RESERVA_FIELDS}
    for field in SANITIZED_FIELDS:
        row[field] = sanitize_input(row[field])
    return row


def _storage_failure(db: Session, mensaje: str, exc: SQLAlchemyError) -> StorageError:
    db.rollback()
    logger.exception("%s: %s", mensaje, exc)
    return StorageError(mensaje)


def list_reservas(db: Session, limit: int) -> List[Reserva]:
    try:
        return db.query(Reserva).limit(limit).all()
    except SQLAlchemyError as e:
        raise _storage_failure(db, "Error al obtener las reservas", e)


def get_reserva(db: Session, raw_id) -> Reserva:
    reserva_id = parse_reserva_id(raw_id)
    if reserva_id is None:
        raise ReservaNotFound()
    try:
        r = db.query(Reserva).filter(Reserva.id == reserva_id).first()
    except SQLAlchemyError as e:
        raise _storage_failure(db, "Error al obtener la reserva", e)
    if not r:
        raise ReservaNotFound()
    return r


def create_reserva(db: Session, payload: Dict[str, Any]) -> None:
    row = build_sanitized_row(payload)
    try:
        db.add(Reserva(**row))
        db.commit()
    except SQLAlchemyError as e:
        raise _storage_failure(db, "Error en el servidor", e)


def update_reserva(db: Session, raw_id, payload: Any, validate: bool = False) -> None:
    """Replace every column of the row ``raw_id`` with the payload values.

    Unless ``validate`` is set the payload goes to storage as sent, with no
    field rules and no sanitization; absent keys become NULL.
    """
    reserva_id = parse_reserva_id(raw_id)
    if reserva_id is None:
        raise ReservaNotFound()
    if validate:
        row = build_sanitized_row(payload)
    else:
        logger.warning("Actualizando la reserva %s sin validar ni sanitizar los datos", reserva_id)
        if not isinstance(payload, dict):
            logger.error("Cuerpo de actualizacion no es un objeto: %r", type(payload).__name__)
            raise StorageError("Error al actualizar la reserva")
        row = {field: payload.get(field) for field in RESERVA_FIELDS}
    try:
        affected = (
            db.query(Reserva)
            .filter(Reserva.id == reserva_id)
            .update(row, synchronize_session=False)
        )
        db.commit()
    except SQLAlchemyError as e:
        raise _storage_failure(db, "Error al actualizar la reserva", e)
    if affected == 0:
        raise ReservaNotFound()


def delete_reserva(db: Session, raw_id) -> None:
    reserva_id = parse_reserva_id(raw_id)
    if reserva_id is None:
        raise ReservaNotFound()
    try:
        affected = (
            db.query(Reserva)
            .filter(Reserva.id == reserva_id)
            .delete(synchronize_session=False)
        )
        db.commit()
    except SQLAlchemyError as e:
        raise _storage_failure(db, "Error al eliminar la reserva", e)
    if affected == 0:
        raise ReservaNotFound()
