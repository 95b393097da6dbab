"""
Instrument

Payment instrument kinds (card, wallet, ...), identified by key.
"""

from paystore.instrument.repository import (
    OrderedMapInstrumentStore,
    PGPoolInstrumentStore,
    instrument_by_id,
    instrument_by_key,
    instruments_with_limit_and_offset,
)

__all__ = [
    "OrderedMapInstrumentStore",
    "PGPoolInstrumentStore",
    "instrument_by_id",
    "instrument_by_key",
    "instruments_with_limit_and_offset",
]
