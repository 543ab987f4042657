from . import frame
from . import batch
from . import exchange

from .frame import encode_frame, decode_frame, write_frame, read_frame
from .batch import DELIMITER, ANSWER_TRAILER, split_batch, join_answers
from .exchange import Exchange, ExchangeAborted, ExchangeReport, ExchangeState, run_exchange


"""
Registry Interface Protocol Layer
=================================

This package defines how orders and answers are put on, and taken off, a
registry interface connection. It does not open connections and it does not
look inside the payloads.

The protocol layer MUST NOT depend on any concrete connection
implementation; it only relies on the contract in rri.transport.base.

---------------------------------------------------------------------

Layer Architecture Overview
---------------------------

User Code / rri.begin
    │
    ▼
Exchange (exchange.py)
    Drives a batch against one connection
    - one order in flight at a time
    - fail fast, answers already delivered stay delivered
    - answer + trailer handed to the sink

    │
    ▼
Batch Container (batch.py)
    Orders separated by a delimiter line
    - split_batch()
    - join_answers()

    │
    ▼
Framer (frame.py)
    4-byte network order length + payload
    - write_frame() / read_frame()
    - maximum frame size checks

---------------------------------------------------------------------

Below the Protocol Layer (for context)
--------------------------------------

Transport Layer (rri.transport)
    Moves bytes
    - blocking write()
    - blocking read_exactly()
    - TLS over TCP

---------------------------------------------------------------------
"""


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
