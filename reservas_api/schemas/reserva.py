import math
import re
from typing import Any, Dict, List, Literal, Optional, Union

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..utils.errors import PayloadValidationError

_TELEFONO_RE = re.compile(r"^[0-9]{10}$")
_NUMERIC_RE = re.compile(r"^[+-]?([0-9]*[.])?[0-9]+$")

# one message per field, whatever rule failed
FIELD_MESSAGES = {
    "apellidos": "Los apellidos deben tener entre 2 y 27 caracteres",
    "nombres": "El nombre debe tener entre 2 y 20 caracteres",
    "email": "Ingresa un email válido",
    "telefono": "Número de teléfono debe ser de 10 dígitos",
    "tipo_evento": "Tipo de evento debe ser válido",
    "plan_evento": "Plan de evento no válido",
    "cantidad_anticipo": "Cantidad de anticipo debe ser un número",
    "servicio_adicional": "Servicio adicional debe ser texto",
    "horas_renta": "Horas de renta no válidas",
    "compromiso_pago": "Compromiso de pago debe ser verdadero o falso",
}

_BOOL_VALUES = {"true": True, "false": False, "1": True, "0": False}


class ReservaCreate(BaseModel):
    """Payload accepted by ``POST /guardar-reserva``.

    Strings are trimmed before the length rules run and the trimmed value is
    what ends up stored. ``email`` is checked but kept as typed.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    apellidos: str = Field(..., min_length=2, max_length=27)
    nombres: str = Field(..., min_length=2, max_length=20)
    email: str
    telefono: str
    tipo_evento: str = Field(..., min_length=3, max_length=10)
    plan_evento: Literal["Clasico", "Premium", "Golden"]
    cantidad_anticipo: float
    servicio_adicional: Optional[str] = None
    horas_renta: Literal["3", "4", "5", "6", "7"]
    compromiso_pago: bool

    @field_validator("email")
    @classmethod
    def validate_email_syntax(cls, v):
        try:
            validate_email(v, check_deliverability=False)
        except EmailNotValidError as e:
            raise ValueError(str(e))
        return v

    @field_validator("telefono", mode="before")
    @classmethod
    def validate_telefono(cls, v):
        if isinstance(v, int) and not isinstance(v, bool):
            v = str(v)
        if not isinstance(v, str) or not _TELEFONO_RE.match(v.strip()):
            raise ValueError("telefono must be 10 digits")
        return v

    @field_validator("cantidad_anticipo", mode="before")
    @classmethod
    def validate_cantidad_anticipo(cls, v):
        if isinstance(v, bool):
            raise ValueError("boolean is not a number")
        if isinstance(v, (int, float)):
            if isinstance(v, float) and not math.isfinite(v):
                raise ValueError("number must be finite")
            return v
        if isinstance(v, str) and _NUMERIC_RE.match(v.strip()):
            return float(v.strip())
        raise ValueError("not a number")

    @field_validator("plan_evento", mode="before")
    @classmethod
    def strip_plan_evento(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("horas_renta", mode="before")
    @classmethod
    def coerce_horas_renta(cls, v):
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("compromiso_pago", mode="before")
    @classmethod
    def validate_compromiso_pago(cls, v):
        if isinstance(v, bool):
            return v
        if isinstance(v, int) and v in (0, 1):
            return bool(v)
        if isinstance(v, str) and v.strip().lower() in _BOOL_VALUES:
            return _BOOL_VALUES[v.strip().lower()]
        raise ValueError("not a boolean")


class ReservaResponse(BaseModel):
    id: int
    apellidos: Optional[str] = None
    nombres: Optional[str] = None
    email: Optional[str] = None
    telefono: Optional[str] = None
    tipo_evento: Optional[str] = None
    plan_evento: Optional[str] = None
    cantidad_anticipo: Optional[float] = None
    servicio_adicional: Optional[str] = None
    horas_renta: Optional[str] = None
    compromiso_pago: Optional[bool] = None

    model_config = ConfigDict(from_attributes=True)


class MensajeResponse(BaseModel):
    mensaje: str


def collect_field_errors(exc: ValidationError, payload: Dict[str, Any]) -> List[Dict[str, Any]]:
    """Turn a pydantic ``ValidationError`` into one ``{campo, mensaje, valor}`` per field."""
    errors = []
    seen = set()
    for err in exc.errors():
        campo = err["loc"][0] if err["loc"] else "body"
        if campo in seen:
            continue
        seen.add(campo)
        errors.append({
            "campo": campo,
            "mensaje": FIELD_MESSAGES.get(campo, err["msg"]),
            "valor": payload.get(campo) if isinstance(payload, dict) else None,
        })
    return errors


def parse_reserva(payload: Union[Dict[str, Any], Any]) -> ReservaCreate:
    """Validate a raw JSON body, raising ``PayloadValidationError`` with every failing field."""
    if not isinstance(payload, dict):
        raise PayloadValidationError([{
            "campo": "body",
            "mensaje": "El cuerpo de la petición debe ser un objeto JSON",
            "valor": None,
        }])
    try:
        return ReservaCreate.model_validate(payload)
    except ValidationError as e:
        raise PayloadValidationError(collect_field_errors(e, payload))
