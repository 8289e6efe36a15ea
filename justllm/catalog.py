"""Balance snapshots and model catalogs reported by backends."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, ClassVar

__all__ = [
    "Currency",
    "BalanceEntry",
    "BalanceSnapshot",
    "ModelInfo",
    "ModelCatalogResponse",
]


def _object(data: Any) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ValueError(f"expected a JSON object, got {type(data).__name__}")
    return data


def _require(data: Mapping[str, Any], key: str) -> Any:
    try:
        return data[key]
    except KeyError:
        raise ValueError(f"missing field `{key}`") from None


def _string(data: Mapping[str, Any], key: str) -> str:
    value = _require(data, key)
    if not isinstance(value, str):
        raise ValueError(f"field `{key}` must be a string")
    return value


def _opt_string(data: Mapping[str, Any], key: str) -> str | None:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise ValueError(f"field `{key}` must be a string")
    return value


def _list(value: Any, key: str) -> list[Any]:
    if not isinstance(value, list):
        raise ValueError(f"field `{key}` must be an array")
    return value


@dataclass(frozen=True)
class Currency:
    """Currency of a balance entry; ``CNY`` and ``USD`` are the known ones."""

    code: str

    CNY: ClassVar[Currency]
    USD: ClassVar[Currency]

    @property
    def is_other(self) -> bool:
        """Whether this currency is not one of the explicitly known ones."""
        return self not in _KNOWN.values()

    def __str__(self) -> str:
        return self.code


Currency.CNY = Currency("CNY")
Currency.USD = Currency("USD")

_KNOWN: dict[str, Currency] = {"Cny": Currency.CNY, "Usd": Currency.USD}


def _currency_to_json(currency: Currency) -> Any:
    for wire_name, known in _KNOWN.items():
        if known == currency:
            return wire_name
    return {"Other": currency.code}


def _currency_from_json(data: Any) -> Currency:
    if isinstance(data, str):
        try:
            return _KNOWN[data]
        except KeyError:
            raise ValueError(f"unknown currency variant `{data}`") from None
    if isinstance(data, Mapping) and list(data) == ["Other"] and isinstance(data["Other"], str):
        return Currency(data["Other"])
    raise ValueError("currency must be a known variant name or an `Other` object")


@dataclass
class BalanceEntry:
    """Balance values for one currency."""

    currency: Currency
    total_balance: str
    granted_balance: str
    topped_up_balance: str


def _entry_to_dict(entry: BalanceEntry) -> dict[str, Any]:
    return {
        "currency": _currency_to_json(entry.currency),
        "total_balance": entry.total_balance,
        "granted_balance": entry.granted_balance,
        "topped_up_balance": entry.topped_up_balance,
    }


def _entry_from_dict(data: Any) -> BalanceEntry:
    data = _object(data)
    return BalanceEntry(
        currency=_currency_from_json(_require(data, "currency")),
        total_balance=_string(data, "total_balance"),
        granted_balance=_string(data, "granted_balance"),
        topped_up_balance=_string(data, "topped_up_balance"),
    )


@dataclass
class BalanceSnapshot:
    """Account availability and per-currency balances."""

    is_available: bool
    entries: list[BalanceEntry] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "is_available": self.is_available,
            "entries": [_entry_to_dict(entry) for entry in self.entries],
        }

    @classmethod
    def from_dict(cls, data: Any) -> BalanceSnapshot:
        data = _object(data)
        available = _require(data, "is_available")
        if not isinstance(available, bool):
            raise ValueError("field `is_available` must be a boolean")
        entries = _list(_require(data, "entries"), "entries")
        return cls(is_available=available, entries=[_entry_from_dict(e) for e in entries])


@dataclass
class ModelInfo:
    """Minimal model metadata."""

    id: str
    object: str | None = None
    owned_by: str | None = None


def _model_to_dict(model: ModelInfo) -> dict[str, Any]:
    return {"id": model.id, "object": model.object, "owned_by": model.owned_by}


def _model_from_dict(data: Any) -> ModelInfo:
    data = _object(data)
    return ModelInfo(
        id=_string(data, "id"),
        object=_opt_string(data, "object"),
        owned_by=_opt_string(data, "owned_by"),
    )


@dataclass
class ModelCatalogResponse:
    """Models currently exposed by a backend."""

    data: list[ModelInfo] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"data": [_model_to_dict(model) for model in self.data]}

    @classmethod
    def from_dict(cls, data: Any) -> ModelCatalogResponse:
        data = _object(data)
        models = _list(_require(data, "data"), "data")
        return cls(data=[_model_from_dict(model) for model in models])