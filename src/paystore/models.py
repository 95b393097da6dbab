"""
Value types for the payment-domain entities.

Every field is optional: ``None`` means "not specified" in an update and
"unknown" in storage. Reference fields hold either a shallow object (only
``id`` set) or the fully loaded record, see paystore.store.hydration.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from datetime import date, datetime, timezone
from typing import Any

from paystore.security import card_brand, mask_pan

EXPIRE_DATE_FORMAT = "%y/%m"

# Transaction types
AUTH = "authorize"
PREAUTH = "preauthorize"
CONFIRMAUTH = "confirmauth"
REVERSAL = "reversal"
REFUND = "refund"
REBILL = "rebill"

# Transaction statuses
NEW = "new"
SUCCESS = "success"
DECLINED = "declined"
WAIT3DS = "wait3ds"
WAITMETHODURL = "waitmethodurl"

FINAL_STATUSES = (SUCCESS, DECLINED)


def is_shallow(record) -> bool:
    """True when only the identifier of a record is populated."""
    return record.id is not None and all(
        getattr(record, f.name) is None for f in fields(record) if f.name != "id"
    )


@dataclass
class Currency:
    id: int | None = None
    numeric_code: int | None = None
    name: str | None = None
    char_code: str | None = None
    exponent: int | None = None


@dataclass
class Channel:
    id: int | None = None
    type_id: int | None = None
    key: str | None = None

    def __str__(self) -> str:
        return f"Channel <{self.key}>"


@dataclass
class Router:
    id: int | None = None
    key: str | None = None


@dataclass
class Instrument:
    id: int | None = None
    key: str | None = None


@dataclass
class Account:
    id: int | None = None
    is_enabled: bool | None = None
    is_test: bool | None = None
    rebill_enabled: bool | None = None
    refund_enabled: bool | None = None
    reversal_enabled: bool | None = None
    partial_confirm_enabled: bool | None = None
    partial_reversal_enabled: bool | None = None
    partial_refund_enabled: bool | None = None
    currency_conversion_enabled: bool | None = None
    currency: Currency | None = None
    channel: Channel | None = None
    settings: dict[str, Any] | None = None

    def __str__(self) -> str:
        return f"Account <{self.id}> ({self.channel})"


@dataclass
class Profile:
    id: int | None = None
    key: str | None = None
    description: str | None = None
    currency: Currency | None = None


@dataclass
class Route:
    id: int | None = None
    profile: Profile | None = None
    instrument: Instrument | None = None
    account: Account | None = None
    router: Router | None = None
    settings: dict[str, Any] | None = None


# =============================================================================
# Card
# =============================================================================


class PAN:
    """Primary account number; renders masked everywhere except ``number``."""

    __slots__ = ("number",)

    def __init__(self, number: str):
        self.number = str(number)

    def __str__(self) -> str:
        return mask_pan(self.number)

    def __format__(self, spec: str) -> str:
        return format(str(self), spec)

    def __repr__(self) -> str:
        return f"PAN('{self}')"

    def __eq__(self, other) -> bool:
        if isinstance(other, PAN):
            return self.number == other.number
        if isinstance(other, str):
            return self.number == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.number)

    def __len__(self) -> int:
        return len(self.number)

    @property
    def last4(self) -> str:
        return self.number[-4:]


def parse_exp_date(value: str | date) -> date:
    """Accept the wire format ``YY/MM`` or ``YYYY-MM`` and return the 1st of that month."""
    if isinstance(value, date):
        return value.replace(day=1)
    if "/" in value:
        return datetime.strptime(value, EXPIRE_DATE_FORMAT).date()
    return datetime.strptime(value[:7], "%Y-%m").date()


def format_exp_date(value: date) -> str:
    return value.strftime(EXPIRE_DATE_FORMAT)


@dataclass
class Card:
    id: int | None = None
    token: str | None = None
    pan: PAN | None = None
    exp_date: date | None = None
    holder: str | None = None

    def __post_init__(self):
        if self.pan is not None and not isinstance(self.pan, PAN):
            self.pan = PAN(self.pan)
        if self.exp_date is not None:
            self.exp_date = parse_exp_date(self.exp_date)

    @property
    def brand(self) -> str:
        if self.pan is None:
            return "Unknown"
        return card_brand(self.pan.number)

    def __str__(self) -> str:
        expire = format_exp_date(self.exp_date) if self.exp_date else "--/--"
        return f"{self.pan} ({expire}) <{self.token}> [{self.brand}]"


# =============================================================================
# Session
# =============================================================================


@dataclass
class Session:
    id: int | None = None
    key: str | None = None
    data: dict[str, Any] | None = None
    expires_at: datetime | None = None

    def is_expired(self, now: datetime = None) -> bool:
        if self.expires_at is None:
            return False
        return self.expires_at < (now or datetime.now(timezone.utc))


def new_session(key: str, data: dict[str, Any]) -> Session:
    return Session(key=key, data=data)


# =============================================================================
# Transaction
# =============================================================================


class _JsonArtifact:
    """3-D Secure artifacts are stored as JSON objects."""

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None):
        if data is None:
            return None
        names = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in names})


@dataclass
class ThreeDSecure10(_JsonArtifact):
    acs_url: str | None = None
    pa_req: str | None = None


@dataclass
class ThreeDSecure20(_JsonArtifact):
    acs_url: str | None = None
    creq: str | None = None


@dataclass
class ThreeDSMethodUrl(_JsonArtifact):
    method_url: str | None = None
    three_ds_method_data: str | None = None


@dataclass
class Transaction:
    id: int | None = None
    created: datetime | None = None
    type: str | None = None
    status: str | None = None
    profile: Profile | None = None
    account: Account | None = None
    instrument: Instrument | None = None
    payment_instrument_id: int | None = None
    amount: int | None = None
    currency: Currency | None = None
    amount_converted: int | None = None
    currency_converted: Currency | None = None
    auth_code: str | None = None
    rrn: str | None = None
    response_code: str | None = None
    error_message: str | None = None
    remote_id: str | None = None
    order_id: str | None = None
    reference: Transaction | None = None
    three_ds_10: ThreeDSecure10 | None = None
    three_ds_20: ThreeDSecure20 | None = None
    three_ds_method_url: ThreeDSMethodUrl | None = None
    additional_data: dict[str, Any] | None = None
    customer: str | None = None

    def mark_new(self) -> None:
        self.status = NEW

    def mark_success(self) -> None:
        self.status = SUCCESS

    def mark_declined(self, error_message: str | None = None) -> None:
        self.status = DECLINED
        self.error_message = error_message

    def mark_wait_3ds(self) -> None:
        self.status = WAIT3DS

    def mark_wait_method_url(self) -> None:
        self.status = WAITMETHODURL

    def is_success(self) -> bool:
        return self.status == SUCCESS

    def is_3ds_waiting(self) -> bool:
        return self.status == WAIT3DS

    def is_method_url_waiting(self) -> bool:
        return self.status == WAITMETHODURL

    def in_final_state(self) -> bool:
        return self.status in FINAL_STATUSES

    def is_preauth(self) -> bool:
        return self.type == PREAUTH

    def is_auth(self) -> bool:
        return self.type == AUTH


def new_transaction(
    tx_type: str,
    order_id: str | None,
    profile: Profile,
    account: Account,
    instrument: Instrument | None = None,
    payment_instrument_id: int | None = None,
    amount: int | None = None,
    customer: str | None = None,
    reference: Transaction | None = None,
) -> Transaction:
    """
    Build a transaction in the ``new`` status.

    The original amount is charged in the profile currency; the converted
    leg uses the account currency. No rate is applied yet, so the converted
    amount equals the original one.
    """
    transaction = Transaction(
        type=tx_type,
        order_id=order_id,
        profile=profile,
        account=account,
        instrument=instrument,
        payment_instrument_id=payment_instrument_id,
        currency=profile.currency,
        amount=amount,
        amount_converted=amount,
        currency_converted=account.currency,
        customer=customer,
        reference=reference,
    )
    transaction.mark_new()
    return transaction
