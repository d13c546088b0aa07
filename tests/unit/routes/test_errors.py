from __future__ import annotations

import pytest

from rental_market.errors import (
    AuthorizationError,
    ConflictError,
    InvalidStateError,
    NotFoundError,
    RentalMarketError,
    ValidationError,
)
from rental_market.routes._errors import to_http_exception


@pytest.mark.unit
@pytest.mark.parametrize(
    "error, status_code",
    [
        (ValidationError("bad range"), 400),
        (InvalidStateError("already rejected"), 400),
        (AuthorizationError("not yours"), 403),
        (NotFoundError("missing"), 404),
        (ConflictError("taken"), 409),
        (RentalMarketError("unexpected"), 500),
    ],
)
def test_to_http_exception_maps_status(error: RentalMarketError, status_code: int) -> None:
    exc = to_http_exception(error)

    assert exc.status_code == status_code
    assert exc.detail == error.message
